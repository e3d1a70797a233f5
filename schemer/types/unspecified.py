from __future__ import annotations


class UnspecifiedType:
    """The value of forms whose result is unspecified (define, one-armed if)."""

    _instance: UnspecifiedType | None = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self): return "#<unspecified>"

    # Truthy: only #f is false
    def __bool__(self): return True

    def __eq__(self, other):
        return isinstance(other, UnspecifiedType)

    def __hash__(self):
        return hash(UnspecifiedType)


Unspecified = UnspecifiedType()
