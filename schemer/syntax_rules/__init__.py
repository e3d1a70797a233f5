"""Pattern-based term rewriting for `syntax-rules` macros.

- pattern:     match a macro use against a pattern, producing bindings
- template:    instantiate a template under a set of bindings
- transformer: SyntaxRules, an ordered list of (pattern, template) rules
"""

from schemer.syntax_rules.pattern import Repetition, match, pattern_variables
from schemer.syntax_rules.template import instantiate
from schemer.syntax_rules.transformer import Rule, SyntaxRules

__all__ = ["Repetition", "match", "pattern_variables", "instantiate", "Rule", "SyntaxRules"]
