"""Runtime environment for schemer.

The Environment stores bindings of Symbols to evaluated values and supports
nested lexical scopes via an `outer` link.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from schemer import LispValue
from schemer.types.errors import SchemeInvalidSymbol, SchemeUnboundSymbol
from schemer.types.symbol import Symbol


class Environment:
    """Hierarchical mapping from Symbols to values."""

    __slots__ = ("vars", "outer")

    def __init__(self, outer: Optional[Environment] = None):
        self.vars: dict[Symbol, LispValue] = {}
        self.outer: Environment | None = outer

    def define(self, name: Symbol, value: LispValue) -> None:
        """Bind `name` to `value` in this frame.

        Raises SchemeInvalidSymbol if `name` is not a Symbol.
        """
        if not isinstance(name, Symbol):
            raise SchemeInvalidSymbol(f"Cannot define {name} as a symbol")
        self.vars[name] = value

    def find(self, symbol: Symbol) -> Optional[Environment]:
        """Find the nearest environment in the chain that contains `symbol`."""
        env: Optional[Environment] = self
        while env is not None:
            if symbol in env.vars:
                return env
            env = env.outer
        return None

    def set(self, name: Symbol, value: LispValue) -> None:
        """Update an existing binding for `name` in the environment chain.

        Raises SchemeUnboundSymbol if the symbol is not found.
        """
        env = self.find(name)
        if env is None:
            raise SchemeUnboundSymbol(f"Cannot set! unbound symbol {name}")
        env.vars[name] = value

    def lookup(self, name: Symbol) -> LispValue:
        """Look up the value bound to `name`, innermost frame first."""
        env = self.find(name)
        if env is None:
            raise SchemeUnboundSymbol(f"Unbound symbol {name}")
        return env.vars[name]

    def root(self) -> Environment:
        env = self
        while env.outer is not None:
            env = env.outer
        return env

    def update(self, mapping: dict[Symbol, LispValue]) -> None:
        """Bulk-define a mapping of Symbol -> value in the current frame."""
        for k, v in mapping.items():
            self.define(k, v)

    def _write_vars(self, buffer: StringIO) -> None:
        buffer.write("{")
        buffer.write(", ".join(f"{k}: {v!r}" for k, v in self.vars.items()))
        buffer.write("}")

    def __str__(self) -> str:
        with StringIO() as buffer:
            self._write_vars(buffer)
            if self.outer is not None:
                buffer.write(" -> ...")
            return buffer.getvalue()

    def __repr__(self) -> str:
        with StringIO() as buffer:
            buffer.write("<Environment chain: ")
            env = self
            frames = []
            while env is not None:
                with StringIO() as frame:
                    env._write_vars(frame)
                    frames.append(frame.getvalue())
                env = env.outer
            buffer.write(" -> ".join(frames))
            buffer.write(">")
            return buffer.getvalue()
