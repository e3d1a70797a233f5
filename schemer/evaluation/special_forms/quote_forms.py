from schemer import SExpression, LispValue, EvaluatorFn
from schemer.types.errors import SchemeArityError, SchemeTypeError, SchemeSyntaxError
from schemer.types.pairs import join, split
from schemer.types.symbol import QUASIQUOTE, UNQUOTE, UNQUOTE_SPLICING


def _tagged(expr: SExpression, tag) -> bool:
    return isinstance(expr, list) and len(expr) == 2 and expr[0] is tag


def eval_quasiquote(
    evaluate_fn: EvaluatorFn,
    expr: SExpression,
    env,
    macros,
    depth: int = 1,
) -> SExpression:
    """Build the datum described by a quasiquote template.

    Unquotes at depth 1 are evaluated; nested quasiquotes raise the depth
    and nested unquotes lower it, so inner templates are kept as data.
    """
    if _tagged(expr, UNQUOTE):
        if depth == 1:
            return evaluate_fn(expr[1], env, macros)
        return [UNQUOTE, eval_quasiquote(evaluate_fn, expr[1], env, macros, depth - 1)]
    if _tagged(expr, QUASIQUOTE):
        return [QUASIQUOTE, eval_quasiquote(evaluate_fn, expr[1], env, macros, depth + 1)]

    parts = split(expr)
    if parts is None:
        return expr
    items, tail = parts
    # `(a . ,b) reads as (a unquote b)
    if len(items) >= 3 and items[-2] is UNQUOTE and isinstance(tail, list):
        items, tail = items[:-2], [UNQUOTE, items[-1]]

    result: list = []
    for item in items:
        if _tagged(item, UNQUOTE_SPLICING):
            if depth == 1:
                spliced = evaluate_fn(item[1], env, macros)
                if not isinstance(spliced, list):
                    raise SchemeTypeError("unquote-splicing must produce a list")
                result.extend(spliced)
                continue
            result.append(
                [UNQUOTE_SPLICING, eval_quasiquote(evaluate_fn, item[1], env, macros, depth - 1)]
            )
            continue
        result.append(eval_quasiquote(evaluate_fn, item, env, macros, depth))

    if tail == []:
        return result
    return join(result, eval_quasiquote(evaluate_fn, tail, env, macros, depth))


def quote_form(
    tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn, _: bool
) -> LispValue:
    if len(tail) != 1:
        raise SchemeArityError("quote expects exactly 1 argument")
    return tail[0]


def quasiquote_form(
    tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn, _: bool
) -> LispValue:
    if len(tail) != 1:
        raise SchemeArityError("quasiquote expects exactly 1 argument")
    return eval_quasiquote(evaluate_fn, tail[0], env, macros)


def unquote_form(
    tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn, _: bool
) -> LispValue:
    raise SchemeSyntaxError("unquote not valid outside of quasiquote")


def unquote_splice_form(
    tail: list[SExpression], env, macros, evaluate_fn: EvaluatorFn, _: bool
) -> LispValue:
    raise SchemeSyntaxError("unquote-splicing not valid outside of quasiquote")
