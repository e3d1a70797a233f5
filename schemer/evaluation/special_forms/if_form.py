from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.types.errors import SchemeArityError
from schemer.types.unspecified import Unspecified
from schemer.types.environment import Environment
from schemer.types.macro_environment import MacroEnvironment
from schemer.types.tail_call import TailExpr


def if_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue | TailExpr:
    if len(tail) not in (2, 3):
        raise SchemeArityError("if requires a test, a consequent and an optional alternative")

    test = evaluate_fn(tail[0], env, macros)
    # Only #f is false
    if test is not False:
        return TailExpr(tail[1], env)
    elif len(tail) == 3:
        return TailExpr(tail[2], env)
    else:
        return Unspecified
