"""Higher-order builtins: apply, map and for-each.

All three dispatch through the shared application engine so compound
procedures and builtins are called the same way the evaluator calls them.
"""
from __future__ import annotations

from schemer import LispValue
from schemer.builtin.env_builtin import car, cdr, proper_list
from schemer.evaluation.apply import apply as apply_engine
from schemer.evaluation.evaluator import evaluate0
from schemer.runtime_context import get_current_macros
from schemer.types.environment import Environment
from schemer.types.errors import SchemeArityError, SchemeError
from schemer.types.lambda_fn import Lambda
from schemer.types.unspecified import Unspecified


def call(env: Environment, fn: LispValue, args: list[LispValue]) -> LispValue:
    """Call `fn` with an argument vector and return its final value.

    A compound procedure needs the macro registry of the running
    evaluation; calling one outside `evaluate` is an error.
    """
    macros = get_current_macros()
    if macros is None and isinstance(fn, Lambda):
        raise SchemeError(f"Cannot apply {fn!r} outside of an evaluation")
    return apply_engine(fn, args, env, macros, evaluate0, False)


def apply(env: Environment, expr: list[LispValue]) -> LispValue:
    """(apply f a ... tail): call f with a ... followed by the elements of tail.

    With only f, f is called with no arguments.
    """
    if not expr:
        raise SchemeArityError("apply requires at least 1 argument")
    fn, *rest = expr
    if not rest:
        return call(env, fn, [])
    args = list(rest[:-1])
    args.extend(proper_list(rest[-1], "apply"))
    return call(env, fn, args)


def _lock_step(env: Environment, expr: list[LispValue], name: str):
    """Yield the head of every list per step, until the first list runs out.

    A later list that runs out first fails in car.
    """
    if len(expr) < 2:
        raise SchemeArityError(f"{name} requires a procedure and at least one list")
    lists = list(expr[1:])
    while lists[0] != []:
        heads = [car(env, [xs]) for xs in lists]
        lists = [cdr(env, [xs]) for xs in lists]
        yield heads


def map_builtin(env: Environment, expr: list[LispValue]) -> list[LispValue]:
    """(map f list1 list2 ...): the list of f applied to corresponding elements."""
    fn = expr[0] if expr else None
    return [call(env, fn, heads) for heads in _lock_step(env, expr, "map")]


def for_each(env: Environment, expr: list[LispValue]) -> LispValue:
    """(for-each f list1 list2 ...): like map, for effect only."""
    fn = expr[0] if expr else None
    for heads in _lock_step(env, expr, "for-each"):
        call(env, fn, heads)
    return Unspecified
