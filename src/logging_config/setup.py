"""Logging Setup.

One-call logging configuration for hosts embedding the push adapter.
JSON output for production, colored console output for development.
"""

import dataclasses
import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Optional

from src.logging_config.config import (
    DEFAULT_LOGGING_CONFIG,
    ENV_LOG_FORMAT,
    ENV_LOG_LEVEL,
    LogFormat,
    LoggingConfig,
    LogLevel,
)
from src.logging_config.context import get_context_dict

# Record attributes added to formatted entries when a call passes them via extra=
EXTRA_FIELDS = (
    "duration_ms", "elapsed_ms", "status_code", "batch_index", "batch_size", "devices",
)


class StructuredFormatter(logging.Formatter):
    """JSON structured log formatter.

    Produces one JSON object per log line with timestamp, level, logger,
    message, plus the bound dispatch context (dispatch_id, tenant,
    platform) and any known extra fields.
    """

    def __init__(self, service_name: str = "push_adapter", include_caller: bool = True):
        super().__init__()
        self.service_name = service_name
        self.include_caller = include_caller

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
        }

        if self.include_caller:
            log_entry["module"] = record.module
            log_entry["function"] = record.funcName
            log_entry["line"] = record.lineno

        ctx = get_context_dict()
        if ctx:
            log_entry.update(ctx)

        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "traceback": self.formatException(record.exc_info),
            }

        for key in EXTRA_FIELDS:
            if hasattr(record, key):
                log_entry[key] = getattr(record, key)

        return json.dumps(log_entry, default=str)


class ConsoleFormatter(logging.Formatter):
    """Colored console formatter for development."""

    COLORS = {
        "DEBUG": "\033[36m",     # Cyan
        "INFO": "\033[32m",      # Green
        "WARNING": "\033[33m",   # Yellow
        "ERROR": "\033[31m",     # Red
        "CRITICAL": "\033[35m",  # Magenta
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.now(timezone.utc).strftime("%H:%M:%S.%f")[:-3]

        ctx = get_context_dict()
        ctx_str = ""
        if ctx:
            parts = [f"{k}={v}" for k, v in ctx.items()]
            ctx_str = f" [{', '.join(parts)}]"

        extras = [f"{key}={getattr(record, key)}" for key in EXTRA_FIELDS if hasattr(record, key)]
        extra_str = f" ({' '.join(extras)})" if extras else ""

        line = (
            f"{color}{timestamp} {record.levelname:8s}{self.RESET} "
            f"{record.name}: {record.getMessage()}{extra_str}{ctx_str}"
        )

        if record.exc_info and record.exc_info[0] is not None:
            line += "\n" + self.formatException(record.exc_info)

        return line


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """Configure the root logger for the push adapter.

    Args:
        config: Logging configuration. Uses defaults if not provided.
                PUSH_ADAPTER_LOG_LEVEL and PUSH_ADAPTER_LOG_FORMAT
                override the level and format.
    """
    config = config or DEFAULT_LOGGING_CONFIG

    env_level = os.environ.get(ENV_LOG_LEVEL, "").upper()
    if env_level in LogLevel.__members__:
        config = dataclasses.replace(config, level=LogLevel(env_level))

    env_format = os.environ.get(ENV_LOG_FORMAT, "").lower()
    if env_format in [f.value for f in LogFormat]:
        config = dataclasses.replace(config, format=LogFormat(env_format))

    if config.format == LogFormat.JSON:
        formatter = StructuredFormatter(
            service_name=config.service_name,
            include_caller=config.include_caller,
        )
    else:
        formatter = ConsoleFormatter()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(getattr(logging, config.level.value))

    # httpx logs every request at INFO
    for noisy in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Return a standard library logger; output follows configure_logging()."""
    return logging.getLogger(name)
