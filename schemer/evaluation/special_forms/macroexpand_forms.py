"""Special forms that expose the macro expander to Scheme code.

macroexpand-1: expand the head position once if it is a macro use.
macroexpand:   fully expand a form (except inside quote/quasiquote),
               expanding head positions to a fixpoint and recursively
               expanding subforms of core forms.

Both return the expansion as an S-expression and do not evaluate it.
A leading (quote ...) around the argument is unwrapped, so
(macroexpand '(and a b)) and (macroexpand (and a b)) agree.
"""

from schemer import SExpression, EvaluatorFn
from schemer.types.errors import SchemeArityError
from schemer.types.symbol import QUOTE


def _unquoted(form: SExpression) -> SExpression:
    if isinstance(form, list) and len(form) == 2 and form[0] is QUOTE:
        return form[1]
    return form


def macroexpand1_form(
    tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn, is_tail_call: bool
):
    if len(tail) != 1:
        raise SchemeArityError("macroexpand-1 expects exactly 1 argument")
    return macros.expand_1(_unquoted(tail[0]))


def macroexpand_form(
    tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn, is_tail_call: bool
):
    if len(tail) != 1:
        raise SchemeArityError("macroexpand expects exactly 1 argument")
    return macros.macro_expand_all(_unquoted(tail[0]))
