"""
daogen structured logging.

Provides JSON and text formatting plus context injection, so every record
emitted during a generation pass can carry the generator and model it
belongs to.
"""

from daogen.logging.config import (
    DaoGenLogger,
    LogFormat,
    LogLevel,
    configure_logging,
    get_logger,
)
from daogen.logging.context import ContextFilter, LogContext, get_log_context, with_log_context
from daogen.logging.formatters import JSONFormatter, TextFormatter

__all__ = [
    # Configuration
    "configure_logging",
    "get_logger",
    "DaoGenLogger",
    "LogLevel",
    "LogFormat",
    # Formatters
    "JSONFormatter",
    "TextFormatter",
    # Context
    "LogContext",
    "with_log_context",
    "get_log_context",
    "ContextFilter",
]
