"""Pattern matcher for syntax-rules.

A pattern is an S-expression in which:
  - a declared literal matches only the identical symbol,
  - `_` matches anything and binds nothing,
  - any other symbol is a pattern variable and binds the matched form,
  - a sub-pattern followed by `...` matches zero or more elements,
  - a dotted tail `(p1 p2 . rest)` captures the remaining elements,
  - any other atom matches an equal atom of the same type.

Variables captured under an ellipsis are bound to a Repetition holding one
entry per matched element, so a captured sequence can never be confused
with a captured list form.
"""

from __future__ import annotations

from typing import Iterator, Optional

from schemer import SExpression
from schemer.types.pairs import join, split
from schemer.types.symbol import Symbol, ELLIPSIS, UNDERSCORE


class Repetition:
    """The per-repetition values of a pattern variable captured under `...`."""

    __slots__ = ("items",)

    def __init__(self, items: list):
        self.items = items

    def __len__(self) -> int:
        return len(self.items)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Repetition) and self.items == other.items

    def __repr__(self) -> str:
        return f"Repetition({self.items!r})"


Bindings = dict[Symbol, "SExpression | Repetition"]


def match(pattern: SExpression, form: SExpression, literals: frozenset[Symbol]) -> Optional[Bindings]:
    """Match `form` against `pattern`.

    Returns the bindings on success and None on failure; failing to match
    is an ordinary outcome, not an error.
    """
    bindings: Bindings = {}
    if _match(pattern, form, literals, bindings):
        return bindings
    return None


def _match(pattern: SExpression, form: SExpression, literals: frozenset[Symbol], bindings: Bindings) -> bool:
    if isinstance(pattern, Symbol):
        if pattern in literals:
            return form is pattern
        if pattern is not UNDERSCORE:
            bindings[pattern] = form
        return True
    if isinstance(pattern, list):
        return _match_sequence(pattern, None, form, literals, bindings)
    if isinstance(pattern, tuple):
        items, tail = pattern
        return _match_sequence(items, tail, form, literals, bindings)
    # Literal datum: "step", 1, #t ... (True must not match 1)
    return type(pattern) is type(form) and pattern == form


def _match_sequence(
    items: list,
    tail_pattern: SExpression | None,
    form: SExpression,
    literals: frozenset[Symbol],
    bindings: Bindings,
) -> bool:
    parts = split(form)
    if parts is None:
        return False
    elements, form_tail = parts

    if ELLIPSIS not in items:
        if len(elements) < len(items):
            return False
        if tail_pattern is None and (len(elements) != len(items) or not isinstance(form_tail, list)):
            return False
        for p, e in zip(items, elements):
            if not _match(p, e, literals, bindings):
                return False
        if tail_pattern is not None:
            return _match(tail_pattern, join(elements[len(items):], form_tail), literals, bindings)
        return True

    idx = items.index(ELLIPSIS)
    before, repeated, after = items[: idx - 1], items[idx - 1], items[idx + 1 :]
    if tail_pattern is None and not isinstance(form_tail, list):
        return False
    count = len(elements) - len(before) - len(after)
    if count < 0:
        return False

    for p, e in zip(before, elements):
        if not _match(p, e, literals, bindings):
            return False
    for p, e in zip(after, elements[len(elements) - len(after):]):
        if not _match(p, e, literals, bindings):
            return False

    captured: list[Bindings] = []
    for e in elements[len(before): len(before) + count]:
        sub: Bindings = {}
        if not _match(repeated, e, literals, sub):
            return False
        captured.append(sub)
    for var in pattern_variables(repeated, literals):
        bindings[var] = Repetition([sub[var] for sub in captured])

    if tail_pattern is not None:
        return _match(tail_pattern, form_tail, literals, bindings)
    return True


def pattern_variables(pattern: SExpression, literals: frozenset[Symbol]) -> list[Symbol]:
    """The pattern variables of `pattern`, in order of appearance."""
    return list(_walk_variables(pattern, literals))


def _walk_variables(pattern: SExpression, literals: frozenset[Symbol]) -> Iterator[Symbol]:
    if isinstance(pattern, Symbol):
        if pattern not in literals and pattern is not ELLIPSIS and pattern is not UNDERSCORE:
            yield pattern
    elif isinstance(pattern, list):
        for p in pattern:
            yield from _walk_variables(p, literals)
    elif isinstance(pattern, tuple):
        items, tail = pattern
        for p in items:
            yield from _walk_variables(p, literals)
        yield from _walk_variables(tail, literals)
