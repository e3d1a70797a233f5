from __future__ import annotations

import logging
from itertools import count
from typing import TYPE_CHECKING

from schemer import SExpression
from schemer.config import get_max_expansion_steps
from schemer.types.errors import SchemeNameError, SchemeSyntaxError
from schemer.types.symbol import Symbol, QUOTE, QUASIQUOTE

if TYPE_CHECKING:
    from schemer.syntax_rules.transformer import SyntaxRules

logger = logging.getLogger(__name__)

_LAMBDA = Symbol("lambda")
_DEFINE = Symbol("define")
_LETREC = Symbol("letrec")
_SET = Symbol("set!")
_OPAQUE = frozenset({QUOTE, QUASIQUOTE, Symbol("define-syntax"), Symbol("syntax-rules")})


class MacroEnvironment:
    """
    Macro registry mapping macro names (Symbols) to SyntaxRules transformers.

    Features:
    - Write-once registration per name
    - Head-position expansion, single step or to a fixed point
    - Full expansion of nested macro uses in core forms
    - Fresh symbol generation for template binders
    """

    def __init__(self, max_steps: int | None = None):
        self.macros: dict[Symbol, SyntaxRules] = {}
        self._gensym_counter = count(1)
        self.max_steps = max_steps if max_steps is not None else get_max_expansion_steps()

    def define_macro(self, name: Symbol, transformer: SyntaxRules) -> None:
        if not isinstance(name, Symbol):
            raise SchemeSyntaxError(f"Macro name must be a Symbol, got {name}")
        if name in self.macros:
            raise SchemeNameError(f"Macro {name} is already defined")
        self.macros[name] = transformer
        logger.debug("registered macro %s (%d rules)", name, len(transformer.rules))

    def is_macro(self, sym: SExpression) -> bool:
        return isinstance(sym, Symbol) and sym in self.macros

    def is_macro_use(self, form: SExpression) -> bool:
        return isinstance(form, list) and bool(form) and self.is_macro(form[0])

    def gen_sym(self, prefix: str = "G") -> Symbol:
        return Symbol(f"{prefix}{next(self._gensym_counter)}")

    # Single-step head expansion
    def expand_1(self, form: SExpression) -> SExpression:
        """Expand only the head-position macro if present."""
        if self.is_macro_use(form):
            head = form[0]
            return self.macros[head].transform(head, form, self)
        return form  # Not a macro call, unchanged

    # Fixed-point head expansion
    def macro_expand_head(self, form: SExpression) -> SExpression:
        """Expand the head position until it is no longer a macro use.

        Iterative, so deeply recursive macros do not consume Python stack.
        """
        cur = form
        for _ in range(self.max_steps):
            if not self.is_macro_use(cur):
                return cur
            cur = self.expand_1(cur)
        from schemer.printer import to_string
        raise SchemeSyntaxError(
            f"Macro expansion of {to_string(form)} did not finish after {self.max_steps} steps",
            macro=form[0],
            form=form,
        )

    def expand(self, name: Symbol, form: SExpression) -> SExpression:
        """Rewrite `form` with the macro `name`, then fully expand the result."""
        if name not in self.macros:
            raise SchemeNameError(f"{name} is not a macro")
        return self.macro_expand_all(self.macros[name].transform(name, form, self))

    # Full expansion
    def macro_expand_all(self, form: SExpression) -> SExpression:
        expanded = self.macro_expand_head(form)

        if isinstance(expanded, list) and expanded:
            head = expanded[0]
            # Quoted data and macro definitions are left alone
            if isinstance(head, Symbol) and head in _OPAQUE:
                return expanded
            if head is _LAMBDA and len(expanded) > 1:
                return [head, expanded[1], *(self.macro_expand_all(x) for x in expanded[2:])]
            if head is _DEFINE and len(expanded) > 1 and not isinstance(expanded[1], Symbol):
                return [head, expanded[1], *(self.macro_expand_all(x) for x in expanded[2:])]
            if head is _SET and len(expanded) > 1:
                return [head, expanded[1], *(self.macro_expand_all(x) for x in expanded[2:])]
            if head is _LETREC and len(expanded) > 1 and isinstance(expanded[1], list):
                bindings = [
                    [b[0], *(self.macro_expand_all(x) for x in b[1:])] if isinstance(b, list) and b else b
                    for b in expanded[1]
                ]
                return [head, bindings, *(self.macro_expand_all(x) for x in expanded[2:])]
            return [self.macro_expand_all(x) for x in expanded]

        if isinstance(expanded, tuple) and len(expanded) == 2:
            lst, tail = expanded
            return [self.macro_expand_all(x) for x in lst], self.macro_expand_all(tail)

        return expanded
