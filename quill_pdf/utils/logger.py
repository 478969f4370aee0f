"""Central logging configuration for the library."""
from __future__ import annotations

import logging
import os
from typing import Optional

LOG_LEVEL_ENV = "QUILL_PDF_LOG_LEVEL"
_DEFAULT_LEVEL = logging.INFO


def _resolve_level() -> int:
    name = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not name:
        return _DEFAULT_LEVEL
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else _DEFAULT_LEVEL


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-level logger with default configuration applied."""
    logger = logging.getLogger(name)
    if not logging.getLogger().handlers:
        logging.basicConfig(level=_resolve_level(), format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    return logger
