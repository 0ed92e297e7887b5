"""Centralized logging configuration and structured logging helpers.

The level comes from CARGO_WHEN_LOG_LEVEL (default WARNING so the wrapper
stays quiet in front of cargo); the CLI overrides it with --loglevel.
"""
from __future__ import annotations

import logging
import os
import sys
import time
from typing import Any, Dict, Optional

from constants import Constants

logger = logging.getLogger(__name__)

_HANDLER_NAME = "cargo_when_stderr"


def _resolve_level(level_name: Optional[str]) -> Optional[int]:
    """Return the numeric level for a known level name, or None."""
    name = str(level_name or Constants.DEFAULT_LOG_LEVEL).upper()
    if name not in Constants.LOG_LEVELS:
        return None
    return getattr(logging, name)


def configure_logging(level_name: Optional[str] = None) -> None:
    """Install the stderr handler on the root logger and set its level.

    Safe to call more than once; the handler is only added the first time.
    An unknown level name falls back to the default level with a warning.

    Args:
        level_name: Explicit level name; falls back to CARGO_WHEN_LOG_LEVEL.
    """
    root = logging.getLogger()
    if not any(getattr(h, "name", None) == _HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.name = _HANDLER_NAME
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)

    requested = level_name or os.environ.get(Constants.ENV_LOG_LEVEL)
    level = _resolve_level(requested)
    if level is None:
        root.setLevel(getattr(logging, Constants.DEFAULT_LOG_LEVEL))
        logger.warning(
            "Invalid log level %r, using %s (valid levels: %s)",
            requested,
            Constants.DEFAULT_LOG_LEVEL,
            ", ".join(Constants.LOG_LEVELS),
        )
        return
    root.setLevel(level)


def add_file_handler(path: str) -> logging.Handler:
    """Also write log records to ``path``."""
    file_handler = logging.FileHandler(path, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
    logging.getLogger().addHandler(file_handler)
    return file_handler


def is_debug_enabled(logger: logging.Logger) -> bool:
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records, dropping None values."""
    return {key: value for key, value in fields.items() if value is not None}


class Timer:
    """Context manager measuring wall-clock duration."""

    def __init__(self):
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.monotonic()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self._end = time.monotonic()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.monotonic()
        return int((end - self._start) * 1000)
