"""Application logging on top of loguru.

Every record carries the request correlation id and passes through the
redaction filter before reaching a sink.
"""

from __future__ import annotations

import logging
import os
import sys
from contextvars import ContextVar
from pathlib import Path
from typing import Any

from loguru import logger as _logger

from .sensitive_filter import sanitize_record

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<lvl>{level:<8}</lvl> | "
    "<magenta>{extra[correlation_id]}</magenta> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
    "<lvl>{message}</lvl>"
)
NO_CORRELATION = "-"
DEFAULT_LOG_FILE = Path(__file__).resolve().parents[3] / "instance" / "app.log"

_correlation_id: ContextVar[str] = ContextVar("correlation_id", default=NO_CORRELATION)

_logger.configure(extra={"correlation_id": NO_CORRELATION})


def resolve_log_file(log_file: str | Path | None = None) -> Path:
    return Path(log_file or os.getenv("LOG_FILE") or DEFAULT_LOG_FILE)


class _StdlibBridge(logging.Handler):
    """Forwards werkzeug/sqlalchemy stdlib records into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        _logger.bind(correlation_id=_correlation_id.get()).opt(
            depth=6, exception=record.exc_info
        ).log(level, record.getMessage())


class ContextualLogger:
    """Module-level logger that tags records with the current request's id."""

    def bound(self) -> Any:
        return _logger.bind(correlation_id=_correlation_id.get())

    def __getattr__(self, name: str) -> Any:
        return getattr(self.bound(), name)


def set_correlation_id(value: str | None) -> None:
    _correlation_id.set(value or NO_CORRELATION)


def get_correlation_id() -> str:
    return _correlation_id.get()


def clear_correlation_id() -> None:
    _correlation_id.set(NO_CORRELATION)


def _sink_options(level: str) -> dict[str, Any]:
    return {
        "level": level,
        "format": LOG_FORMAT,
        "filter": sanitize_record,
        "backtrace": False,
        "diagnose": False,
    }


def setup_logging(level: str | None = None, *, log_file: str | Path | None = None) -> None:
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    path = resolve_log_file(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    _logger.remove()
    _logger.add(sys.stderr, colorize=True, **_sink_options(level))
    # enqueue: request threads share the file sink
    _logger.add(path, colorize=False, enqueue=True, encoding="utf-8", **_sink_options(level))

    logging.basicConfig(handlers=[_StdlibBridge()], level=0, force=True)
    logging.getLogger("werkzeug").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


logger = ContextualLogger()

__all__ = [
    "logger",
    "setup_logging",
    "resolve_log_file",
    "set_correlation_id",
    "clear_correlation_id",
    "get_correlation_id",
]
