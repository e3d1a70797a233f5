from __future__ import annotations

from typing import Hashable

from schemer import LispValue
from schemer.types.char import Char
from schemer.types.errors import SchemeTypeError
from schemer.types.lambda_fn import Lambda
from schemer.types.pairs import split


def hash_key(value: LispValue) -> Hashable:
    """Map a datum to a dict key; keys that are equal? map to equal keys.

    Tagged keys keep #t, #\\1 and 1.0 apart from 1 and "1".
    Procedures cannot be keys.
    """
    if isinstance(value, bool):
        return ("#bool", value)
    if isinstance(value, Char):
        return ("#char", str(value))
    if isinstance(value, float):
        return ("#float", value)
    if isinstance(value, list):
        return ("#list", tuple(hash_key(x) for x in value))
    if isinstance(value, tuple):
        items, tail = split(value)
        return ("#dotted", tuple(hash_key(x) for x in items), hash_key(tail))
    if isinstance(value, (Lambda, HashTable)) or callable(value):
        from schemer.printer import to_string
        raise SchemeTypeError(f"Hashing not supported for {to_string(value)}")
    return value


class HashTable:
    """A mutable table from data to values, made by make-hash-table."""

    __slots__ = ("entries",)

    def __init__(self):
        self.entries: dict[Hashable, LispValue] = {}

    def __len__(self) -> int:
        return len(self.entries)

    def get(self, key: LispValue, default: LispValue = False) -> LispValue:
        return self.entries.get(hash_key(key), default)

    def set(self, key: LispValue, value: LispValue) -> None:
        self.entries[hash_key(key)] = value

    def __repr__(self) -> str:
        return f"#<hash-table {len(self.entries)}>"
