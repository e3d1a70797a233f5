from __future__ import annotations
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from schemer.types.macro_environment import MacroEnvironment

# NOTE: For now this is process-global. If threading is introduced,
# consider switching to contextvars or threading.local.
_current_macros: Optional[MacroEnvironment] = None


def set_current_macros(m: Optional[MacroEnvironment]) -> Optional[MacroEnvironment]:
    """Install `m` as the macro environment builtins see; returns the previous one."""
    global _current_macros
    previous = _current_macros
    _current_macros = m
    return previous


def get_current_macros() -> Optional[MacroEnvironment]:
    return _current_macros
