"""List structure helpers.

Proper lists are Python lists. An improper (dotted) list is a 2-tuple
`(items, tail)` whose tail is not a list; these helpers keep that shape
normalised so `(a . (b c))` and `(a b c)` are the same value.
"""

from __future__ import annotations

from typing import Optional

from schemer import LispValue


def split(value: LispValue) -> Optional[tuple[list, LispValue]]:
    """Return (elements, tail) for a list-shaped value, else None.

    The tail is [] for a proper list.
    """
    if isinstance(value, list):
        return value, []
    if isinstance(value, tuple) and len(value) == 2 and isinstance(value[0], list):
        items, tail = value
        rest = split(tail)
        if rest is None:
            return items, tail
        return items + rest[0], rest[1]
    return None


def join(elements: list, tail: LispValue) -> LispValue:
    """Build the value made of `elements` followed by `tail`."""
    parts = split(tail)
    if parts is not None:
        elements, tail = list(elements) + parts[0], parts[1]
        if isinstance(tail, list):
            return elements
    if not elements:
        return tail
    return list(elements), tail


def is_pair(value: LispValue) -> bool:
    parts = split(value)
    return parts is not None and len(parts[0]) > 0
