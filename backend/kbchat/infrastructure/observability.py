"""Structured Logging — JSON formatter, context-bound loggers and event helpers.

Invariants:
    - All logs include timestamp, level, logger name, and message
    - Extra fields (request_id, conversation_id, operation, ...) surfaced when present
    - JSON format in production, human-readable in development
    - Log context is passed explicitly (bind_logger), never stored in a global

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once on startup via lifespan; repeated calls replace
      the handler instead of stacking duplicates
    - LoggerAdapter for context: stdlib, works with every logging.Logger call site
"""

import logging
import json
from datetime import datetime, timezone
from typing import Any

CONTEXT_FIELDS = (
    "request_id", "conversation_id", "operation", "error_code",
    "http_method", "path", "status_code", "duration_ms",
    "event", "event_type", "name_source", "conversation_name", "opener",
)

_HANDLER_NAME = "kbchat"


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            val = record.__dict__.get(key)
            if val is not None:
                log[key] = val
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", fmt: str = "json"):
    """Configure logging for the application."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == _HANDLER_NAME:
            logging.root.removeHandler(existing)

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))


class ContextLogger(logging.LoggerAdapter):
    """Logger carrying an explicit context merged into every record."""

    def process(self, msg, kwargs):
        extra = kwargs.get("extra") or {}
        kwargs["extra"] = {**self.extra, **extra}
        return msg, kwargs

    def bind(self, **context: Any) -> "ContextLogger":
        """Child logger with additional context."""
        return ContextLogger(self.logger, {**self.extra, **context})


def bind_logger(logger: logging.Logger | ContextLogger, **context: Any) -> ContextLogger:
    """Attach context to a logger; binding a ContextLogger merges contexts."""
    if isinstance(logger, ContextLogger):
        return logger.bind(**context)
    return ContextLogger(logger, context)


def log_business_event(logger, event: str, **data: Any) -> None:
    logger.info(
        f"Business event: {event}",
        extra={"event_type": "business", "event": event, **data},
    )


def log_security_event(logger, event: str, **data: Any) -> None:
    logger.warning(
        f"Security event: {event}",
        extra={"event_type": "security", "event": event, **data},
    )
