from __future__ import annotations

from schemer import LispValue
from schemer.types.environment import Environment
from schemer.types.errors import SchemeArityError
from schemer.types.symbol import Symbol


def bind_arguments(
    formals: list[Symbol],
    rest: Symbol | None,
    supplied_args: list[LispValue],
    closure_env: Environment,
    name: str = "lambda",
) -> Environment:
    """
    Single source of truth for parameter binding.

    Supports:
    - Positional required parameters, bound left to right
    - A rest parameter, from (a b . rest) or a bare symbol formals list,
      capturing the remaining supplied arguments as a proper list

    Returns a new Environment whose outer is the closure_env, populated with
    the bindings for evaluating the callee body.
    """
    provided = len(supplied_args)
    arity = len(formals)

    if provided < arity:
        missing = [str(s) for s in formals[provided:]]
        raise SchemeArityError(
            f"{name}: too few arguments; missing {len(missing)} parameter(s): {missing}"
        )
    if rest is None and provided > arity:
        raise SchemeArityError(
            f"{name}: too many arguments; expected {arity}, got {provided}"
        )

    local_env = Environment(outer=closure_env)
    for formal, value in zip(formals, supplied_args):
        local_env.define(formal, value)
    if rest is not None:
        local_env.define(rest, list(supplied_args[arity:]))
    return local_env


def parse_formals(params) -> tuple[list[Symbol], Symbol | None]:
    """Split a lambda parameter spec into (fixed formals, rest parameter).

    (a b)      -> ([a, b], None)
    (a b . c)  -> ([a, b], c)
    args       -> ([], args)
    """
    from schemer.types.errors import SchemeInvalidSymbol

    if isinstance(params, Symbol):
        return [], params
    if isinstance(params, tuple) and len(params) == 2:
        fixed, rest = params
        if not isinstance(rest, Symbol):
            raise SchemeInvalidSymbol(f"Rest parameter must be a Symbol, got {rest}")
    elif isinstance(params, list):
        fixed, rest = params, None
    else:
        raise SchemeInvalidSymbol(f"Expected a symbol or parameter list, got {params}")

    seen: set[Symbol] = set()
    for p in [*fixed, *([rest] if rest is not None else [])]:
        if not isinstance(p, Symbol):
            raise SchemeInvalidSymbol(f"Parameter must be a Symbol, got {p}")
        if p in seen:
            raise SchemeInvalidSymbol(f"Duplicate parameter {p}")
        seen.add(p)
    return list(fixed), rest
