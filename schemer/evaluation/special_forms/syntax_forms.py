"""Special forms: define-syntax and syntax-rules.

`syntax-rules` evaluates to a SyntaxRules transformer; `define-syntax`
registers it under a name in the macro environment.
"""

from __future__ import annotations

from schemer import EvaluatorFn, SExpression, LispValue
from schemer.syntax_rules.transformer import SyntaxRules
from schemer.types.environment import Environment
from schemer.types.errors import SchemeArityError, SchemeInvalidSymbol, SchemeSyntaxError
from schemer.types.macro_environment import MacroEnvironment
from schemer.types.symbol import Symbol
from schemer.types.unspecified import Unspecified

USAGE = "Usage: (syntax-rules (literals ...) ((pattern) template) ...)"


def syntax_rules_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    if not tail or not isinstance(tail[0], list):
        raise SchemeSyntaxError(USAGE)
    rules = []
    for clause in tail[1:]:
        if not isinstance(clause, list) or len(clause) != 2:
            raise SchemeSyntaxError(USAGE)
        rules.append((clause[0], clause[1]))
    return SyntaxRules(tail[0], rules)


def define_syntax_form(
    tail: list[SExpression],
    env: Environment,
    macros: MacroEnvironment,
    evaluate_fn: EvaluatorFn,
    _: bool,
) -> LispValue:
    """(define-syntax name transformer): register a macro under `name`."""
    if len(tail) != 2:
        raise SchemeArityError("define-syntax requires a name and a transformer")
    name, spec = tail
    if not isinstance(name, Symbol):
        raise SchemeInvalidSymbol(f"Macro name must be a Symbol, got {name}")
    transformer = evaluate_fn(spec, env, macros)
    if not isinstance(transformer, SyntaxRules):
        raise SchemeSyntaxError(f"define-syntax of {name} expects a syntax-rules transformer")
    macros.define_macro(name, transformer)
    return Unspecified
