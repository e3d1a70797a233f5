from __future__ import annotations
import logging
from typing import Callable, Literal

from schemer import SExpression, LispValue
from schemer.config import configure_logging
from schemer.reader.parser import lex, TokenStream
from schemer.types.unspecified import Unspecified
from schemer.types.macro_environment import MacroEnvironment
from schemer.types.environment import Environment
from schemer.builtin.env_builtin import register

logger = logging.getLogger(__name__)


class Interpreter:
    """
    Orchestrates reading and evaluating Scheme code via a pluggable evaluator.
    Maintains an Environment and MacroEnvironment across calls.
    """

    def __init__(
        self,
        eval_fn: Callable[[SExpression, Environment, MacroEnvironment], LispValue] | None = None,
        prelude: str | None | Literal['auto'] = 'auto',
    ):
        configure_logging()
        if eval_fn is None:
            from schemer.evaluation.evaluator import evaluate
            eval_fn = evaluate
        self.eval_fn = eval_fn
        self.env: Environment = Environment()
        register(self.env)

        self.macros: MacroEnvironment = MacroEnvironment()

        if prelude is None:
            pass  # explicit: no prelude
        elif prelude == 'auto':
            # Lazy import to avoid circular imports
            from schemer.prelude import load_prelude
            load_prelude(self)
        elif prelude:
            self.eval_prelude(prelude)

    def eval_prelude(self, code: str) -> None:
        for expr in TokenStream(lex(code)).parse_all():
            self.eval_fn(expr, self.env, self.macros)

    def eval(self, code: str) -> LispValue:
        results: list[LispValue] = [
            self.eval_fn(expr, self.env, self.macros)
            for expr in TokenStream(lex(code)).parse_all()
        ]
        if not results:
            return Unspecified
        if len(results) == 1:
            return results[0]
        return results

    def expand(self, code: str) -> SExpression:
        """Fully macro-expand the forms in `code` without evaluating them."""
        expanded = [self.macros.macro_expand_all(expr) for expr in TokenStream(lex(code)).parse_all()]
        logger.debug("expanded %d form(s)", len(expanded))
        if len(expanded) == 1:
            return expanded[0]
        return expanded
