from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.types.errors import SchemeInvalidSymbol, SchemeArityError
from schemer.types.symbol import Symbol
from schemer.types.environment import Environment
from schemer.types.macro_environment import MacroEnvironment
from schemer.types.unspecified import Unspecified


def set_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue:
    if len(tail) != 2:
        raise SchemeArityError("set! requires exactly 2 arguments: (set! var value)")
    var_sym, val_expr = tail
    if not isinstance(var_sym, Symbol):
        raise SchemeInvalidSymbol(f"set! first argument must be a Symbol, got {var_sym}")
    value = evaluate_fn(val_expr, env, macros)
    env.set(var_sym, value)
    return Unspecified
