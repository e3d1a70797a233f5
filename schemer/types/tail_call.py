from schemer import LispValue
from schemer.types.lambda_fn import Lambda
from schemer.types.environment import Environment


class TailCall:
    """A pending procedure body evaluation, stepped by the trampoline."""

    __slots__ = ("fn", "args", "env", "macros")

    def __init__(self, fn: Lambda, args: list[LispValue], env: Environment, macros):
        self.fn = fn
        self.args = args
        self.env = env
        self.macros = macros


class TailExpr:
    """An expression a special form leaves for the evaluator to continue with.

    Only evaluate0 consumes these; they never reach user code.
    """

    __slots__ = ("expr", "env")

    def __init__(self, expr, env: Environment):
        self.expr = expr
        self.env = env
