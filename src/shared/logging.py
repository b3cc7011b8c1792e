"""Structured JSON logging with build_id support."""
from __future__ import annotations

import contextvars
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any

# Context variable for build_id
build_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "build_id", default=""
)


class JSONFormatter(logging.Formatter):
    """Custom JSON log formatter."""

    def __init__(self, service_name: str = "unknown") -> None:
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "service_name": self.service_name,
            "build_id": build_id_var.get(""),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info and record.exc_info[1]:
            log_entry["exception"] = str(record.exc_info[1])
        return json.dumps(log_entry)


def setup_logging(service_name: str, level: str = "WARNING") -> logging.Logger:
    """Configure structured JSON logging for the CLI.

    Handlers are attached to the ``src`` package logger so that every
    module logger (``logging.getLogger(__name__)``) inherits them.

    Args:
        service_name: Name recorded in every log entry.
        level: Log level string (e.g. "INFO", "DEBUG").

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger("src")
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler()
    handler.setFormatter(JSONFormatter(service_name=service_name))
    logger.addHandler(handler)

    return logger


def new_build_id() -> str:
    """Start a new correlation id for the current invocation."""
    build_id = str(uuid.uuid4())
    build_id_var.set(build_id)
    return build_id
