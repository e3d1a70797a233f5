# Core type aliases for schemer's data model.
# Plain Python values represent both code (forms) and runtime values:
# proper lists are Python lists, dotted lists are (items, tail) tuples,
# symbols are interned Symbol objects and #t/#f are Python booleans.
#
# Naming guidance:
# - SExpression: use in reader/macro code for syntactic forms (code-as-data).
# - LispValue:  use in evaluator/runtime code for evaluated values.
# Both resolve to `Any` and are interchangeable.

from typing import Any, Callable

LispValue = Any
SExpression = LispValue

# Evaluator function type: the evaluator handed to special forms and macros
EvaluatorFn = Callable[..., LispValue]
