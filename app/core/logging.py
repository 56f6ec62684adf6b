"""Structured key=value logging for the LifeOS API."""

import logging
import sys
from typing import Any

# Promoted to top-level keys, right after the message
CONTEXT_FIELDS = ("user_id", "function_name", "kind")


class StructuredFormatter(logging.Formatter):
    """Render records as `key=value` pairs."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "module": record.module,
            "message": record.getMessage(),
        }

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_data[field] = value

        log_data.update(getattr(record, "extra_data", {}))

        line = " ".join(f"{k}={v}" for k, v in log_data.items())
        if record.exc_info:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def _level_for_env() -> int:
    try:
        from app.core.config import get_settings

        return logging.DEBUG if get_settings().LIFEOS_ENV == "dev" else logging.INFO
    except Exception:
        # Settings not loadable yet (missing env)
        return logging.INFO


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger writing structured lines to stdout.

    DEBUG in the dev environment, INFO otherwise.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(_level_for_env())

    return logger


def log_with_context(logger: logging.Logger, level: int, msg: str, **kwargs: Any) -> None:
    """
    Log with context fields.

    user_id, function_name and kind become top-level keys; anything else is
    appended as extra key=value pairs.
    """
    extra: dict[str, Any] = {f: kwargs.pop(f) for f in CONTEXT_FIELDS if f in kwargs}
    extra["extra_data"] = kwargs
    logger.log(level, msg, extra=extra)
