"""Central level-based logger (standard library `logging`).

Library modules only fetch loggers; handlers are installed by the entry point
through `configure_logging()`.

Env:
- LOG_LEVEL: DEBUG|INFO|WARNING|ERROR|CRITICAL (default: WARNING)
"""

from __future__ import annotations

import logging
import os
from typing import Optional


def _level_from_env(default: str = "WARNING") -> int:
    raw = (os.getenv("LOG_LEVEL") or default).upper().strip()
    return getattr(logging, raw, logging.WARNING)


def configure_logging() -> None:
    """Configure the root logger once (idempotent); the level is refreshed on every call."""
    level = _level_from_env()
    root = logging.getLogger()
    if not getattr(root, "_kvstore_configured", False):
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        )
        setattr(root, "_kvstore_configured", True)
    root.setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "kvstore")
