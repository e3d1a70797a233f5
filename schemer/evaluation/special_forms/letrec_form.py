from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.types.environment import Environment
from schemer.types.errors import SchemeArityError, SchemeSyntaxError
from schemer.types.lambda_fn import Lambda
from schemer.types.macro_environment import MacroEnvironment
from schemer.types.symbol import Symbol
from schemer.types.tail_call import TailExpr
from schemer.types.unspecified import Unspecified
from schemer.evaluation.special_forms.begin_form import begin_form

USAGE = "Usage: (letrec ((variable init) ...) body ...)"


def letrec_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
    is_tail_call: bool = False,
) -> LispValue | TailExpr:
    """
    (letrec ((v1 init1) (v2 init2) ...) body ...)

    Every variable is in scope of every init, so inits may refer to each
    other (recursive procedures). Inits are evaluated left to right.
    """
    if len(tail) < 2 or not isinstance(tail[0], list):
        raise SchemeArityError(USAGE)

    bindings = tail[0]
    for b in bindings:
        if not isinstance(b, list) or len(b) != 2 or not isinstance(b[0], Symbol):
            raise SchemeSyntaxError(USAGE)

    local_env = Environment(outer=env)
    for var, _ in bindings:
        local_env.define(var, Unspecified)
    for var, init in bindings:
        value = evaluate_fn(init, local_env, macros)
        if isinstance(value, Lambda) and value.name is None:
            value.name = var.id
        local_env.set(var, value)

    return begin_form(tail[1:], local_env, macros, evaluate_fn, is_tail_call)
