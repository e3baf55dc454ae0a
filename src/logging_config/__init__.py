"""Structured logging for the push adapter.

Provides JSON/console log formatting and dispatch-scoped context
(dispatch ID, tenant, platform) bound to every log line.
"""

from src.logging_config.config import LogFormat, LoggingConfig, LogLevel
from src.logging_config.context import (
    DispatchContext,
    bind_platform,
    generate_dispatch_id,
    get_context_dict,
)
from src.logging_config.setup import configure_logging, get_logger

__all__ = [
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "DispatchContext",
    "bind_platform",
    "configure_logging",
    "generate_dispatch_id",
    "get_context_dict",
    "get_logger",
]
