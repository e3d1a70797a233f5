"""Core evaluator and trampoline for the schemer interpreter.

Implements head-position macro expansion, special-form dispatch, and
tail-call aware application via a trampoline over TailCall objects.
"""

from __future__ import annotations

from schemer import SExpression, LispValue
from schemer.runtime_context import set_current_macros
from schemer.types.environment import Environment
from schemer.types.errors import SchemeSyntaxError
from schemer.types.macro_environment import MacroEnvironment
from schemer.types.symbol import Symbol
from schemer.types.tail_call import TailCall, TailExpr
from schemer.evaluation.apply import apply
from schemer.evaluation.special_forms import SPECIAL_FORMS


def evaluate(
    expr: SExpression, env: Environment, macros: MacroEnvironment | None = None
) -> LispValue:
    """
    Trampoline evaluator: evaluate `expr` to a final value.
    """
    if macros is None:
        macros = MacroEnvironment()

    previous = set_current_macros(macros)
    try:
        result = evaluate0(expr, env, macros, True)  # Start in 'tail' mode.
        while isinstance(result, TailCall):
            result = evaluate0(result.fn.body, result.env, result.macros, True)
        return result
    finally:
        set_current_macros(previous)


def evaluate0(
    expr: SExpression,
    env: Environment,
    macros: MacroEnvironment,
    is_tail_call: bool = False,
) -> LispValue:
    """
    Core evaluator: single-step evaluation with tail-call awareness.
    Returns a TailCall only when is_tail_call is set.

    Macro rewrites and the tail expressions of special forms are
    continued in this loop, so long if/begin chains do not grow the stack.
    """
    while True:
        if isinstance(expr, Symbol):
            return env.lookup(expr)

        if isinstance(expr, tuple):
            raise SchemeSyntaxError("Cannot evaluate an improper list")

        # --- Atoms (and the empty list) return as-is ---
        if not isinstance(expr, list) or not expr:
            return expr

        # Head-position macro: rewrite to a core form first.
        if macros.is_macro_use(expr):
            expr = macros.macro_expand_head(expr)
            continue

        head, *tail_args = expr

        # --- Special forms handling ---
        if isinstance(head, Symbol) and head in SPECIAL_FORMS:
            result = SPECIAL_FORMS[head](tail_args, env, macros, evaluate0, is_tail_call)
            if isinstance(result, TailExpr):
                expr, env = result.expr, result.env
                continue
            return result

        # --- Procedure application, operator and operands left to right ---
        fn = evaluate0(head, env, macros)
        args = [evaluate0(arg, env, macros) for arg in tail_args]
        return apply(fn, args, env, macros, evaluate0, is_tail_call)
