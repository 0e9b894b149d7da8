"""Logging setup for applications embedding typedbencode.

The library logs at DEBUG through ``logging.getLogger(__name__)`` and never
configures handlers itself. ``setup_logging`` attaches console and file
handlers to the ``typedbencode`` logger tree from an ``ObservabilityConfig``.

Records that carry a parse or decode failure are annotated with where the
failure happened: ``position`` for a ``ParseError``, ``coding_path`` for a
``DecodingError``.
"""

from __future__ import annotations

import json
import logging
import logging.config
import sys
import time
import uuid
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from rich.console import Console
from rich.logging import RichHandler

from typedbencode.exceptions import DecodingError, ParseError

if TYPE_CHECKING:
    from typedbencode.models import ObservabilityConfig

ROOT_LOGGER = "typedbencode"

_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)

# Attributes every LogRecord has; anything else was passed through ``extra``
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "correlation_id", "coding_path", "position"}


def get_correlation_id() -> str | None:
    """Identifier of the operation running in the current context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Tag log records in the current context with ``correlation_id``."""
    correlation_id = correlation_id or uuid.uuid4().hex[:12]
    _correlation_id.set(correlation_id)
    return correlation_id


class DecodeContextFilter(logging.Filter):
    """Attach the correlation ID and the failure location to each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = _correlation_id.get() or "-"
        error = record.exc_info[1] if record.exc_info else None
        if isinstance(error, ParseError) and error.position is not None:
            record.position = error.position
        elif isinstance(error, DecodingError):
            record.coding_path = str(error.coding_path)
        return True


class JSONFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "time": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", None),
        }
        for name in ("coding_path", "position"):
            if hasattr(record, name):
                entry[name] = getattr(record, name)
        entry.update(
            (key, value)
            for key, value in record.__dict__.items()
            if key not in _RECORD_ATTRIBUTES
        )
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class ColoredFormatter(logging.Formatter):
    """Plain-terminal formatter with ANSI colored level names.

    The location of a decode failure is appended to the message.
    """

    LEVEL_COLORS: ClassVar[dict[int, str]] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[35m",
    }
    RESET: ClassVar[str] = "\033[0m"

    def __init__(self) -> None:
        super().__init__(
            "%(asctime)s %(levelname)s [%(correlation_id)s] %(name)s: %(message)s",
            datefmt="%H:%M:%S",
        )

    def formatMessage(self, record: logging.LogRecord) -> str:  # noqa: N802
        line = super().formatMessage(record)
        color = self.LEVEL_COLORS.get(record.levelno)
        if color:
            line = line.replace(
                record.levelname, f"{color}{record.levelname}{self.RESET}", 1
            )
        if hasattr(record, "coding_path"):
            line += f" (at {record.coding_path})"
        elif hasattr(record, "position"):
            line += f" (at byte {record.position})"
        return line


def _console_handler(config: ObservabilityConfig) -> dict[str, Any]:
    if config.rich_console:
        return {
            "()": RichHandler,
            "console": Console(stderr=True),
            "show_path": False,
            "filters": ["decode_context"],
        }
    return {
        "class": "logging.StreamHandler",
        "stream": sys.stderr,
        "formatter": "json" if config.structured_logging else "colored",
        "filters": ["decode_context"],
    }


def _file_handler(config: ObservabilityConfig) -> dict[str, Any]:
    Path(config.log_file).parent.mkdir(parents=True, exist_ok=True)
    return {
        "class": "logging.handlers.RotatingFileHandler",
        "filename": config.log_file,
        "encoding": "utf-8",
        "maxBytes": 5 * 1024 * 1024,
        "backupCount": 3,
        "formatter": "json",
        "filters": ["decode_context"],
    }


def setup_logging(config: ObservabilityConfig) -> None:
    """Configure the ``typedbencode`` logger tree from ``config``.

    The file handler always writes JSON so logs stay machine readable.
    """
    handlers = {"console": _console_handler(config)}
    if config.log_file:
        handlers["file"] = _file_handler(config)

    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "filters": {"decode_context": {"()": DecodeContextFilter}},
            "formatters": {
                "colored": {"()": ColoredFormatter},
                "json": {"()": JSONFormatter},
            },
            "handlers": handlers,
            "loggers": {
                ROOT_LOGGER: {
                    "level": config.log_level.value,
                    "handlers": list(handlers),
                    "propagate": False,
                },
            },
        }
    )

    if config.log_correlation_id and get_correlation_id() is None:
        set_correlation_id()


class LoggingContext:
    """Log the start, outcome and duration of one decoding operation.

    A correlation ID is assigned only when the caller has not set one, so
    records from nested operations share the caller's ID.
    """

    def __init__(
        self,
        operation: str,
        logger: logging.Logger | None = None,
        **fields: Any,
    ):
        """Initialize context for ``operation``; ``fields`` go into ``extra``."""
        self.operation = operation
        self.fields = fields
        self.logger = logger or logging.getLogger(f"{ROOT_LOGGER}.operations")
        self._started = 0.0

    def __enter__(self) -> LoggingContext:
        if get_correlation_id() is None:
            set_correlation_id()
        self._started = time.perf_counter()
        self.logger.debug("Starting %s", self.operation, extra=self.fields)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> bool:
        elapsed = time.perf_counter() - self._started
        if exc_val is None:
            self.logger.debug(
                "Completed %s in %.3fs", self.operation, elapsed, extra=self.fields
            )
        else:
            self.logger.debug(
                "Failed %s in %.3fs: %s",
                self.operation,
                elapsed,
                exc_val,
                exc_info=exc_val,
                extra=self.fields,
            )
        return False
