"""Template instantiation for syntax-rules.

Pattern variables in a template are replaced by the forms they matched.
A sub-template followed by `...` is instantiated once per repetition of
the Repetition-bound variables it references, the i-th instantiation
seeing the i-th entry of each; consecutive ellipses flatten one level
each. Everything else is copied verbatim.
"""

from __future__ import annotations

from typing import Iterator

from schemer import SExpression
from schemer.syntax_rules.pattern import Bindings, Repetition
from schemer.types.errors import SchemeSyntaxError
from schemer.types.pairs import join
from schemer.types.symbol import Symbol, ELLIPSIS


def instantiate(template: SExpression, bindings: Bindings) -> SExpression:
    if isinstance(template, Symbol):
        if template in bindings:
            value = bindings[template]
            if isinstance(value, Repetition):
                raise SchemeSyntaxError(
                    f"Pattern variable {template} is used in a template without enough ellipses"
                )
            return value
        return template
    if isinstance(template, list):
        return _instantiate_sequence(template, bindings)
    if isinstance(template, tuple):
        items, tail = template
        return join(_instantiate_sequence(items, bindings), instantiate(tail, bindings))
    return template


def _instantiate_sequence(items: list, bindings: Bindings) -> list:
    result: list = []
    i = 0
    while i < len(items):
        sub = items[i]
        depth = 0
        while i + depth + 1 < len(items) and items[i + depth + 1] is ELLIPSIS:
            depth += 1
        if depth:
            result.extend(_repeat(sub, bindings, depth))
        else:
            result.append(instantiate(sub, bindings))
        i += depth + 1
    return result


def _repeat(sub: SExpression, bindings: Bindings, depth: int) -> list:
    """Instantiate `sub` once per repetition, `depth` ellipses deep."""
    driving = [s for s in dict.fromkeys(template_symbols(sub)) if isinstance(bindings.get(s), Repetition)]
    if not driving:
        raise SchemeSyntaxError("No pattern variables before ellipsis in template")

    lengths = {len(bindings[s]) for s in driving}
    if len(lengths) > 1:
        names = ", ".join(str(s) for s in driving)
        raise SchemeSyntaxError(f"Incompatible ellipsis match counts for {names}")

    out: list = []
    for k in range(lengths.pop()):
        narrowed = dict(bindings)
        for s in driving:
            narrowed[s] = bindings[s].items[k]
        if depth == 1:
            out.append(instantiate(sub, narrowed))
        else:
            out.extend(_repeat(sub, narrowed, depth - 1))
    return out


def template_symbols(template: SExpression) -> Iterator[Symbol]:
    """Every symbol occurring in `template`, ellipses excluded."""
    if isinstance(template, Symbol):
        if template is not ELLIPSIS:
            yield template
    elif isinstance(template, list):
        for t in template:
            yield from template_symbols(t)
    elif isinstance(template, tuple):
        items, tail = template
        for t in items:
            yield from template_symbols(t)
        yield from template_symbols(tail)
