from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.types.errors import SchemeArityError
from schemer.types.environment import Environment
from schemer.types.macro_environment import MacroEnvironment
from schemer.types.tail_call import TailExpr


def eval_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue | TailExpr:
    """(eval expr): evaluate expr to a datum, then evaluate that datum here."""
    if len(tail) != 1:
        raise SchemeArityError("eval expects exactly one argument")
    datum = evaluate_fn(tail[0], env, macros)
    return TailExpr(datum, env)
