"""Logging setup for the workflow simulator.

Request-scoped fields (request id, method, path) live in a context variable,
so concurrent requests each see their own values in log records.
"""

import logging
import sys
import json
import traceback
from contextvars import ContextVar, Token
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from typing import Optional, Dict, Any
from pathlib import Path


DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s"

_request_context: ContextVar[Dict[str, Any]] = ContextVar("flowsim_request_context", default={})


class StructuredFormatter(logging.Formatter):
    """Render each record as one JSON object per line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "location": f"{record.module}:{record.funcName}:{record.lineno}",
        }
        entry.update(getattr(record, "context", {}))
        entry.update(getattr(record, "extra_fields", {}))

        if record.exc_info and record.exc_info[0] is not None:
            entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": traceback.format_exception(*record.exc_info),
            }

        return json.dumps(entry, default=str)


class RequestContextFilter(logging.Filter):
    """Copy the current request context onto each record."""

    def filter(self, record: logging.LogRecord) -> bool:
        context = dict(_request_context.get())
        record.context = context
        record.request_id = context.get("request_id", "-")
        return True


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    log_format: Optional[str] = None,
    structured: bool = False,
    max_size: int = 10 * 1024 * 1024,
    backup_count: int = 5
) -> logging.Logger:
    """
    Configure the root logger for the simulator.

    Args:
        level: Logging level name
        log_file: Optional path of a rotating log file
        log_format: Format string for plain text output
        structured: Emit JSON lines instead of plain text
        max_size: Bytes before the log file rotates
        backup_count: Rotated files to keep

    Returns:
        Root logger instance
    """
    if structured:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(fmt=log_format or DEFAULT_LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    handlers: list = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(RotatingFileHandler(log_file, maxBytes=max_size, backupCount=backup_count))

    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    context_filter = RequestContextFilter()
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        root_logger.addHandler(handler)

    for noisy in ("uvicorn.access", "asyncio", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name."""
    return logging.getLogger(name)


def get_logging_context() -> Dict[str, Any]:
    """Return a copy of the fields bound to the current context."""
    return dict(_request_context.get())


def set_logging_context(**kwargs) -> Token:
    """Bind fields to the current context and return a token for reset."""
    return _request_context.set({**_request_context.get(), **kwargs})


def reset_logging_context(token: Token):
    """Restore the context that was active before the matching set call."""
    _request_context.reset(token)
