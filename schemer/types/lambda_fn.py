"""Compound procedure representation for schemer."""

from __future__ import annotations

from io import StringIO

from schemer import SExpression, LispValue
from schemer.types.environment import Environment
from schemer.types.symbol import Symbol


class Lambda:
    """A first-class procedure with formal parameters, body and closure env."""

    __slots__ = ("formals", "rest", "body", "env", "name")

    def __init__(
        self,
        formals: list[Symbol],
        rest: Symbol | None,
        body: SExpression,
        env: Environment | None = None,
        name: str | None = None,
    ):
        self.formals: list[Symbol] = formals
        self.rest: Symbol | None = rest
        self.body: SExpression = body
        self.env: Environment = env if env is not None else Environment()
        self.name: str | None = name

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(lambda (")
            buffer.write(" ".join(str(f) for f in self.formals))
            if self.rest is not None:
                buffer.write(f" . {self.rest}" if self.formals else str(self.rest))
            buffer.write(") ")
            buffer.write(str(self.body))
            buffer.write(")")
            return buffer.getvalue()

    def __repr__(self) -> str:
        return f"#<procedure {self.name or 'anonymous'}>"

    def extend_env(self, args: list[LispValue]) -> Environment:
        """
        Bind the given argument values to this procedure's parameters and
        return a new Environment for evaluating the body.
        """
        from schemer.types.bind import bind_arguments
        return bind_arguments(self.formals, self.rest, list(args), self.env, self.name or "lambda")
