from __future__ import annotations
import sys
from weakref import WeakValueDictionary


class Symbol:
    """An interned identifier.

    Symbols with the same name are the same object, so identity and
    equality agree; hashing goes through the interned name. The intern
    table holds symbols weakly, so generated names that nothing refers to
    any more are released.
    """

    __slots__ = ("id", "__weakref__")
    _table: WeakValueDictionary[str, Symbol] = WeakValueDictionary()

    def __new__(cls, name: str) -> Symbol:
        sym = cls._table.get(name)
        if sym is None:
            sym = super().__new__(cls)
            sym.id = sys.intern(name)
            cls._table[name] = sym
        return sym

    def __eq__(self, other: object) -> bool:
        return self is other

    def __hash__(self) -> int:
        return hash(self.id)

    def __reduce__(self):
        return Symbol, (self.id,)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id


# Symbols the runtime itself inspects
QUOTE = Symbol("quote")
QUASIQUOTE = Symbol("quasiquote")
UNQUOTE = Symbol("unquote")
UNQUOTE_SPLICING = Symbol("unquote-splicing")
ELLIPSIS = Symbol("...")
UNDERSCORE = Symbol("_")
