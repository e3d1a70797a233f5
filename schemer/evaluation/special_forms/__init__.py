"""Registry of special forms for the schemer evaluator.

Maps Symbols to handler functions that implement non-standard evaluation rules.
The evaluator consults this table to dispatch special forms before ordinary
procedure application.
"""

from schemer.types.symbol import Symbol
from schemer.evaluation.special_forms.begin_form import begin_form
from schemer.evaluation.special_forms.define_form import define_form
from schemer.evaluation.special_forms.eval_form import eval_form
from schemer.evaluation.special_forms.if_form import if_form
from schemer.evaluation.special_forms.lambda_form import lambda_form
from schemer.evaluation.special_forms.letrec_form import letrec_form
from schemer.evaluation.special_forms.macroexpand_forms import macroexpand_form, macroexpand1_form
from schemer.evaluation.special_forms.quote_forms import quote_form, quasiquote_form, unquote_form, unquote_splice_form
from schemer.evaluation.special_forms.set_form import set_form
from schemer.evaluation.special_forms.syntax_forms import define_syntax_form, syntax_rules_form

SPECIAL_FORMS = {
    Symbol("begin"): begin_form,
    Symbol("define"): define_form,
    Symbol("define-syntax"): define_syntax_form,
    Symbol("eval"): eval_form,
    Symbol("if"): if_form,
    Symbol("lambda"): lambda_form,
    Symbol("letrec"): letrec_form,
    Symbol("macroexpand"): macroexpand_form,
    Symbol("macroexpand-1"): macroexpand1_form,
    Symbol("quote"): quote_form,
    Symbol("quasiquote"): quasiquote_form,
    Symbol("unquote"): unquote_form,
    Symbol("unquote-splicing"): unquote_splice_form,
    Symbol("set!"): set_form,
    Symbol("syntax-rules"): syntax_rules_form,
}
