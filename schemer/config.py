from __future__ import annotations
import logging
import os
from pathlib import Path
from typing import Iterable, List


def _sep() -> str:
    return ';' if os.name == 'nt' else ':'


# Resolve installation dir (schemer package directory)
_SCHEMER_DIR = Path(__file__).resolve().parent

# Defaults
_DEFAULT_PRELUDE_DIR = _SCHEMER_DIR / 'prelude'
_DEFAULT_MAX_EXPANSION_STEPS = 10000


def paths_from_env(var: str, defaults: Iterable[Path]) -> List[Path]:
    raw = os.environ.get(var)
    if not raw:
        return [Path(p) for p in defaults]
    sep = _sep()
    return [Path(p.strip()) for p in raw.split(sep) if p.strip()]


def get_prelude_root() -> Path:
    roots = paths_from_env('SCHEMER_PRELUDE_PATH', [_DEFAULT_PRELUDE_DIR])
    # treat as single directory; if a file path is set, return its parent
    p = roots[0]
    return p if p.is_dir() else p.parent


def get_max_expansion_steps() -> int:
    raw = os.environ.get('SCHEMER_MAX_EXPANSION_STEPS')
    if not raw:
        return _DEFAULT_MAX_EXPANSION_STEPS
    try:
        steps = int(raw)
    except ValueError:
        raise ValueError(f"SCHEMER_MAX_EXPANSION_STEPS must be an integer, got {raw!r}") from None
    if steps < 1:
        raise ValueError(f"SCHEMER_MAX_EXPANSION_STEPS must be positive, got {steps}")
    return steps


def configure_logging() -> None:
    """Apply SCHEMER_LOG_LEVEL, if set, to the package logger."""
    level = os.environ.get('SCHEMER_LOG_LEVEL')
    if not level:
        return
    logging.getLogger('schemer').setLevel(level.upper())
