"""Structured JSON logger for the resume parsing pipeline.

Each record is a single JSON object:
{"time":"2026-10-18T09:12:03.114592-04:00","level":"INFO","source":{"function":"parse_resume","file":"pipeline.py","line":88},"msg":"resume parsed","lines":42}

The level can be overridden with the RESUME_LOG_LEVEL environment variable.
"""

import json
import logging
import os
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any

# Fields attached to every record emitted within the current context
_log_context: ContextVar[dict[str, Any]] = ContextVar("log_context", default={})


class StructuredFormatter(logging.Formatter):
    """JSON formatter with slog-style field layout."""

    def format(self, record: logging.LogRecord) -> str:
        now = datetime.now(timezone.utc).astimezone()

        log_entry: dict[str, Any] = {
            "time": now.isoformat(),
            "level": record.levelname,
            "source": {
                "function": record.funcName,
                "file": os.path.basename(record.pathname),
                "line": record.lineno,
            },
            "msg": record.getMessage(),
        }

        ctx_fields = _log_context.get()
        if ctx_fields:
            log_entry.update(ctx_fields)

        if hasattr(record, "extra_fields"):
            log_entry.update(record.extra_fields)

        return json.dumps(log_entry, default=str)


def _level_from_env(default: int = logging.INFO) -> int:
    name = os.getenv("RESUME_LOG_LEVEL", "").upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


class StructuredLogger:
    """Logger that emits structured JSON records with context support."""

    def __init__(self, name: str = "resume_outreach", level: int | None = None):
        self._logger = logging.getLogger(name)
        self._logger.setLevel(level if level is not None else _level_from_env())

        self._logger.handlers.clear()

        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(StructuredFormatter())
        self._logger.addHandler(handler)

        self._logger.propagate = False

    def _log(
        self,
        level: int,
        msg: str,
        stacklevel: int = 3,
        **fields: Any,
    ) -> None:
        extra = {"extra_fields": fields} if fields else {}
        self._logger.log(level, msg, stacklevel=stacklevel, extra=extra)

    def set_level(self, level: int) -> None:
        self._logger.setLevel(level)

    def debug(self, msg: str, **fields: Any) -> None:
        """Log a debug message with optional fields."""
        self._log(logging.DEBUG, msg, **fields)

    def info(self, msg: str, **fields: Any) -> None:
        """Log an info message with optional fields."""
        self._log(logging.INFO, msg, **fields)

    def warn(self, msg: str, **fields: Any) -> None:
        """Log a warning message with optional fields."""
        self._log(logging.WARNING, msg, **fields)

    def error(self, msg: str, **fields: Any) -> None:
        """Log an error message with optional fields."""
        self._log(logging.ERROR, msg, **fields)

    @contextmanager
    def timed(
        self, msg: str, level: int = logging.INFO, **fields: Any
    ) -> Iterator[dict[str, Any]]:
        """Log msg with duration_ms once the wrapped stage completes.

        Yields a dict that the block can fill with counts known only after
        the stage has run. Nothing is logged if the block raises.

        Example:
            with logger.timed("resume parsed") as fields:
                document = structure_lines(lines)
                fields["lines"] = len(lines)
        """
        start = time.perf_counter()
        yield fields
        duration_ms = (time.perf_counter() - start) * 1000
        # _log <- timed <- contextlib __exit__ <- caller
        self._log(level, msg, stacklevel=4, duration_ms=round(duration_ms, 2), **fields)


def set_context(**fields: Any) -> None:
    """Attach fields to every subsequent log record in this context."""
    current = _log_context.get()
    _log_context.set({**current, **fields})


def clear_context() -> None:
    """Clear all context fields."""
    _log_context.set({})


def get_context() -> dict[str, Any]:
    """Get current context fields."""
    return _log_context.get().copy()


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Attach fields to records logged inside the block.

    The surrounding context is restored on exit, so nested parses (a batch
    running inside a request, say) keep their outer fields.

    Example:
        with log_context(source_name="jane_doe.pdf"):
            logger.info("resume parsed")  # includes source_name
    """
    token = _log_context.set({**_log_context.get(), **fields})
    try:
        yield
    finally:
        _log_context.reset(token)


# Default logger instance
logger = StructuredLogger("resume_outreach")
