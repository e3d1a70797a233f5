"""The bundled prelude: derived forms written in Scheme."""

from __future__ import annotations

import logging
from typing import Protocol

from schemer.config import get_prelude_root

logger = logging.getLogger(__name__)

PRELUDE_FILES = ("derived.scm",)


class _HasEvalPrelude(Protocol):
    def eval_prelude(self, code: str) -> None: ...


def load_prelude(itp: _HasEvalPrelude) -> None:
    """Evaluate every prelude file found under the prelude root, in order.

    Raises FileNotFoundError when the root holds none of them.
    """
    root = get_prelude_root()
    found = [root / name for name in PRELUDE_FILES if (root / name).exists()]
    if not found:
        raise FileNotFoundError(f"No prelude files in {root}")
    for path in found:
        logger.debug("loading prelude %s", path)
        itp.eval_prelude(path.read_text(encoding="utf-8"))
