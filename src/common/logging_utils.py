"""Centralized logging helpers shared by the CLI and the classifier.

Modules log through ``logging.getLogger(__name__)`` and attach structured
fields with ``extra=extra_context(...)``. DEBUG traces are guarded with
``is_debug_enabled`` so building the context costs nothing otherwise.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

ENV_LOG_LEVEL = "VERSIONLENS_LOG_LEVEL"
DEFAULT_LOG_FORMAT = "[%(levelname)s] %(message)s"

# Structured keys appended to DEBUG lines when present on a record.
CONTEXT_KEYS = ("event", "component", "action", "outcome", "target", "count", "duration_ms")


class ContextFormatter(logging.Formatter):
    """Formatter that appends known structured fields as ``key=value`` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        pairs = [f"{key}={getattr(record, key)}" for key in CONTEXT_KEYS if hasattr(record, key)]
        if pairs and record.levelno <= logging.DEBUG:
            message = f"{message} [{' '.join(pairs)}]"
        return message


def _resolve_level(level: Optional[str]) -> int:
    name = (level or os.environ.get(ENV_LOG_LEVEL) or "INFO").upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.INFO


def configure_logging(level: Optional[str] = None, log_file: Optional[str] = None,
                      fmt: str = DEFAULT_LOG_FORMAT) -> None:
    """Install a single root handler; repeated calls replace the previous one."""
    root = logging.getLogger()
    for handler in list(root.handlers):
        if getattr(handler, "_versionlens", False):
            root.removeHandler(handler)

    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(ContextFormatter(fmt))
    handler._versionlens = True  # type: ignore[attr-defined]
    root.addHandler(handler)
    root.setLevel(_resolve_level(level))


def is_debug_enabled(logger: logging.Logger) -> bool:
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for a log call, dropping unset fields."""
    return {key: value for key, value in fields.items() if value is not None}


class Timer:
    """Context manager measuring wall time in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
