from schemer import EvaluatorFn
from schemer import SExpression, LispValue
from schemer.types.bind import parse_formals
from schemer.types.environment import Environment
from schemer.types.errors import SchemeArityError, SchemeInvalidSymbol
from schemer.types.lambda_fn import Lambda
from schemer.types.macro_environment import MacroEnvironment
from schemer.types.pairs import join, split
from schemer.types.symbol import Symbol
from schemer.types.unspecified import Unspecified
from schemer.evaluation.special_forms.lambda_form import make_body

USAGE = "Usage: (define variable value) OR (define (proc formals) body ...)"


def define_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """
    (define name value)
    (define (name . formals) body ...)  ==  (define name (lambda formals body ...))
    """
    if not tail:
        raise SchemeArityError(USAGE)
    target = tail[0]

    if isinstance(target, Symbol):
        if len(tail) != 2:
            raise SchemeArityError(USAGE)
        value = evaluate_fn(tail[1], env, macros)
        if isinstance(value, Lambda) and value.name is None:
            value.name = target.id
        env.define(target, value)
        return Unspecified

    parts = split(target)
    if parts is None or not parts[0] or not isinstance(parts[0][0], Symbol):
        raise SchemeInvalidSymbol(USAGE)
    if len(tail) < 2:
        raise SchemeArityError(USAGE)
    elements, rest = parts
    name = elements[0]
    formals, rest_param = parse_formals(join(elements[1:], rest))
    env.define(name, Lambda(formals, rest_param, make_body(tail[1:]), env, name.id))
    return Unspecified
