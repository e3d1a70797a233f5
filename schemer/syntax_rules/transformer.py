"""The syntax-rules transformer.

A SyntaxRules value is what `(syntax-rules (literal ...) (pattern template) ...)`
evaluates to; `define-syntax` registers it by name in a MacroEnvironment.
Rules are tried top-down and the first matching rule is used exclusively.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterator

from schemer import SExpression
from schemer.syntax_rules.pattern import match, pattern_variables
from schemer.syntax_rules.template import instantiate, template_symbols
from schemer.types.errors import SchemeSyntaxError
from schemer.types.pairs import join, split
from schemer.types.symbol import Symbol, ELLIPSIS, UNDERSCORE, QUOTE

if TYPE_CHECKING:
    from schemer.types.macro_environment import MacroEnvironment

logger = logging.getLogger(__name__)

_LAMBDA = Symbol("lambda")
_NAMED_BINDINGS = frozenset({Symbol("let"), Symbol("let*"), Symbol("letrec"), Symbol("do")})


class Rule:
    """One (pattern template) clause.

    `pattern` has the macro keyword position removed; `binders` lists the
    symbols the template itself introduces in a binding position.
    """

    __slots__ = ("pattern", "template", "variables", "binders")

    def __init__(self, pattern: SExpression, template: SExpression, literals: frozenset[Symbol]):
        self.pattern = pattern
        self.template = template
        self.variables = frozenset(pattern_variables(pattern, literals))
        free = {
            s
            for s in template_symbols(template)
            if s not in self.variables and s not in literals and s is not UNDERSCORE
        }
        self.binders = tuple(dict.fromkeys(s for s in template_binders(template) if s in free))

    def __repr__(self) -> str:
        return f"Rule({self.pattern!r} => {self.template!r})"


class SyntaxRules:
    """An ordered list of rewrite rules sharing one set of literals."""

    def __init__(self, literals: list[Symbol], rules: list[tuple[SExpression, SExpression]]):
        for lit in literals:
            if not isinstance(lit, Symbol):
                raise SchemeSyntaxError(f"syntax-rules literal must be a symbol, got {lit}")
        if ELLIPSIS in literals:
            raise SchemeSyntaxError("Ellipsis (...) cannot be in the literals list")
        self.literals: frozenset[Symbol] = frozenset(literals)
        self.rules: list[Rule] = []
        for pattern, template in rules:
            self.rules.append(self._make_rule(pattern, template))

    def _make_rule(self, pattern: SExpression, template: SExpression) -> Rule:
        parts = split(pattern)
        if parts is None or not parts[0] or not isinstance(parts[0][0], Symbol):
            raise SchemeSyntaxError(f"Pattern must be a list starting with the macro keyword, got {pattern}")
        elements, tail = parts
        # The keyword position never takes part in matching
        pattern = join(elements[1:], tail)
        _verify_pattern(pattern, self.literals, set())
        _verify_template(template)
        return Rule(pattern, template, self.literals)

    def transform(self, name: Symbol, form: SExpression, macros: MacroEnvironment) -> SExpression:
        """Rewrite one macro use with the first rule whose pattern matches.

        Binders introduced by the template get fresh names for this
        expansion, so they cannot capture symbols from the use site.
        Raises SchemeSyntaxError naming the macro and the form when no rule matches.
        """
        parts = split(form)
        args = join(parts[0][1:], parts[1]) if parts is not None else form
        for index, rule in enumerate(self.rules):
            bindings = match(rule.pattern, args, self.literals)
            if bindings is None:
                continue
            logger.debug("%s: rule %d matched", name, index)
            renames = {sym: macros.gen_sym(f"{sym.id}%") for sym in rule.binders}
            return instantiate(_rename(rule.template, renames), bindings)

        from schemer.printer import to_string
        raise SchemeSyntaxError(
            f"No syntax-rules pattern of {name} matches {to_string(form)}", macro=name, form=form
        )

    def __repr__(self) -> str:
        return f"#<syntax-rules {len(self.rules)} rule(s)>"


def _formal_symbols(formals: SExpression) -> Iterator[Symbol]:
    if isinstance(formals, Symbol):
        if formals is not ELLIPSIS:
            yield formals
        return
    parts = split(formals)
    if parts is None:
        return
    elements, tail = parts
    for f in elements:
        if isinstance(f, Symbol) and f is not ELLIPSIS:
            yield f
    if not isinstance(tail, list):
        yield from _formal_symbols(tail)


def template_binders(template: SExpression) -> Iterator[Symbol]:
    """Yield symbols in binding positions of core and derived binding forms.

    Covers lambda formals, let/let*/letrec/do binding names and the
    named-let tag.
    """
    parts = split(template)
    if parts is None:
        return
    elements, tail = parts
    if elements and elements[0] is QUOTE:
        return
    if len(elements) > 1:
        head = elements[0]
        if head is _LAMBDA:
            yield from _formal_symbols(elements[1])
        elif isinstance(head, Symbol) and head in _NAMED_BINDINGS:
            clauses = elements[1]
            if isinstance(clauses, Symbol) and head is Symbol("let"):
                yield clauses
                clauses = elements[2] if len(elements) > 2 else []
            if isinstance(clauses, list):
                for clause in clauses:
                    if isinstance(clause, list) and clause and isinstance(clause[0], Symbol):
                        yield clause[0]
    for t in elements:
        yield from template_binders(t)
    if not isinstance(tail, list):
        yield from template_binders(tail)


def _rename(template: SExpression, renames: dict[Symbol, Symbol]) -> SExpression:
    if not renames:
        return template
    if isinstance(template, Symbol):
        return renames.get(template, template)
    if isinstance(template, list):
        # Quoted data is never renamed
        if template and template[0] is QUOTE:
            return template
        return [_rename(t, renames) for t in template]
    if isinstance(template, tuple):
        items, tail = template
        return [_rename(t, renames) for t in items], _rename(tail, renames)
    return template


def _verify_pattern(pattern: SExpression, literals: frozenset[Symbol], seen: set[Symbol]) -> None:
    if isinstance(pattern, Symbol):
        if pattern is ELLIPSIS:
            raise SchemeSyntaxError("Ellipsis must follow a sub-pattern inside a list")
        if pattern not in literals and pattern is not UNDERSCORE:
            if pattern in seen:
                raise SchemeSyntaxError(f"Duplicate pattern variable {pattern}")
            seen.add(pattern)
        return
    parts = split(pattern)
    if parts is None:
        return
    elements, tail = parts
    ellipses = [i for i, p in enumerate(elements) if p is ELLIPSIS]
    if len(ellipses) > 1:
        raise SchemeSyntaxError("At most one ellipsis is allowed per list in a pattern")
    if ellipses and ellipses[0] == 0:
        raise SchemeSyntaxError("Ellipsis cannot start a list in a pattern")
    for p in elements:
        if p is not ELLIPSIS:
            _verify_pattern(p, literals, seen)
    if not isinstance(tail, list):
        _verify_pattern(tail, literals, seen)


def _verify_template(template: SExpression) -> None:
    parts = split(template)
    if parts is None:
        return
    elements, tail = parts
    if elements and elements[0] is ELLIPSIS:
        raise SchemeSyntaxError("Ellipsis must follow a sub-template")
    for t in elements:
        _verify_template(t)
    if not isinstance(tail, list):
        _verify_template(tail)
