"""Centralized logging configuration and structured-logging helpers.

All log output goes to stderr: stdout is shared with the driver process and
must not carry anything the driver's client did not ask for.
"""
from __future__ import annotations

import logging
import os
import sys
import time
import urllib.parse
from typing import Any, Dict, Optional

from constants import Constants

_HANDLER_NAME = "chromedriver-auto-stderr"
_FILE_HANDLER_PREFIX = "chromedriver-auto-file:"


def _resolve_level(level_name: Optional[str]) -> int:
    """Map a level name to a logging level, falling back to the default."""
    name = (level_name or Constants.DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    return logging.getLevelName(Constants.DEFAULT_LOG_LEVEL)


def configure_logging(level_name: Optional[str] = None, log_file: Optional[str] = None) -> None:
    """Configure the root logger once; safe to call repeatedly.

    Level precedence: explicit argument, then CHROMEDRIVER_AUTO_LOG_LEVEL,
    then Constants.DEFAULT_LOG_LEVEL.
    """
    root = logging.getLogger()
    level = _resolve_level(level_name or os.environ.get(Constants.ENV_LOG_LEVEL))

    handler = next((h for h in root.handlers if h.get_name() == _HANDLER_NAME), None)
    if handler is None:
        handler = logging.StreamHandler(sys.stderr)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)

    if log_file:
        file_name = f"{_FILE_HANDLER_PREFIX}{os.path.abspath(log_file)}"
        if not any(h.get_name() == file_name for h in root.handlers):
            file_handler = logging.FileHandler(log_file)
            file_handler.set_name(file_name)
            file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
            root.addHandler(file_handler)
            root.info("Logging to file: %s", log_file)


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by logger."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra=`` mapping for structured log records.

    None values are dropped so records only carry populated fields.
    """
    return {key: value for key, value in fields.items() if value is not None}


def safe_url(url: str) -> str:
    """Strip credentials, query string and fragment from a URL for logging."""
    try:
        parts = urllib.parse.urlsplit(url)
    except ValueError:
        return "<invalid url>"
    host = parts.hostname or ""
    if parts.port:
        host = f"{host}:{parts.port}"
    return urllib.parse.urlunsplit((parts.scheme, host, parts.path, "", ""))


class Timer:
    """Context manager measuring wall-clock duration in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> float:
        """Elapsed milliseconds; measured up to now while still running."""
        end = self._end if self._end is not None else time.perf_counter()
        return round((end - self._start) * 1000.0, 2)
