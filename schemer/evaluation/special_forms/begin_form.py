from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.types.environment import Environment
from schemer.types.macro_environment import MacroEnvironment
from schemer.types.tail_call import TailExpr
from schemer.types.unspecified import Unspecified


def begin_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue | TailExpr:
    if not tail:
        return Unspecified
    for e in tail[:-1]:
        evaluate_fn(e, env, macros)
    return TailExpr(tail[-1], env)
