from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.types.bind import parse_formals
from schemer.types.environment import Environment
from schemer.types.errors import SchemeArityError
from schemer.types.lambda_fn import Lambda
from schemer.types.macro_environment import MacroEnvironment
from schemer.types.symbol import Symbol


def make_body(body_forms: list[SExpression]) -> SExpression:
    """A single body form is used directly; several are wrapped in begin."""
    if len(body_forms) == 1:
        return body_forms[0]
    return [Symbol("begin"), *body_forms]


def lambda_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    # (lambda formals body ...) with at least one body form
    if len(tail) < 2:
        raise SchemeArityError("lambda requires a parameter list and at least one body form")

    formals, rest = parse_formals(tail[0])
    return Lambda(formals, rest, make_body(tail[1:]), env)
