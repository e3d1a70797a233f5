"""Application engine for schemer.

This module centralizes procedure application for the interpreter:
- Tail-call awareness via TailCall objects (consumed by the trampoline).
- Application of compound procedures (Lambda) with exact-arity binding.
- Application of Python callables registered in the environment.

The evaluator, the `apply` and `map` builtins and the special forms all
dispatch through here so application semantics stay in one place.
"""

from typing import Callable

from schemer import LispValue, EvaluatorFn
from schemer.types.environment import Environment
from schemer.types.errors import SchemeTypeError
from schemer.types.lambda_fn import Lambda
from schemer.types.tail_call import TailCall


def resolve_tail(value: LispValue, evaluate_fn: EvaluatorFn) -> LispValue:
    """Step the trampoline until `value` is no longer a TailCall."""
    while isinstance(value, TailCall):
        value = evaluate_fn(value.fn.body, value.env, value.macros, True)
    return value


def apply_lambda(
    fn: Lambda,
    args: list[LispValue],
    macros,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool,
) -> LispValue | TailCall:
    """Apply a compound procedure.

    - Arguments are bound by Lambda.extend_env (arity errors raise there).
    - In tail position the body is returned as a TailCall for the trampoline;
      otherwise it is evaluated to a final value here.
    """
    new_env = fn.extend_env(args)
    if is_tail_call:
        return TailCall(fn, args, new_env, macros)
    return resolve_tail(evaluate_fn(fn.body, new_env, macros, True), evaluate_fn)


def apply(
    head: Lambda | Callable[[Environment, list[LispValue]], LispValue] | object,
    args: list[LispValue],
    env: Environment,
    macros,
    evaluate_fn: EvaluatorFn,
    tail: bool = False,
) -> LispValue | TailCall:
    """Apply either a Lambda or a Python callable.

    - For Lambda, defer to apply_lambda.
    - For Python callables (builtins), invoke with the runtime env and list of args.
    - Otherwise, raise a type error.
    """
    if isinstance(head, Lambda):
        return apply_lambda(head, args, macros, evaluate_fn, tail)
    elif callable(head):
        return head(env, args)
    else:
        from schemer.printer import to_string
        raise SchemeTypeError(f"Cannot apply non-procedure {to_string(head)}")
