"""Logging Configuration.

Settings for structured logging, log levels, and output formats.
"""

from dataclasses import dataclass
from enum import Enum


class LogLevel(str, Enum):
    """Log level options."""
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output format."""
    JSON = "json"
    CONSOLE = "console"


# Environment variables that override the configured level and format
ENV_LOG_LEVEL = "PUSH_ADAPTER_LOG_LEVEL"
ENV_LOG_FORMAT = "PUSH_ADAPTER_LOG_FORMAT"


@dataclass
class LoggingConfig:
    """Structured logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    include_caller: bool = True
    service_name: str = "push_adapter"


DEFAULT_LOGGING_CONFIG = LoggingConfig()
