"""
Logging context management for daogen.

Lets a generator declare which pass and model it is working on so that
every record logged inside that scope carries those fields.
"""

from __future__ import annotations

import contextvars
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any

_log_context: contextvars.ContextVar[dict[str, Any] | None] = contextvars.ContextVar(
    "daogen_log_context",
    default=None,
)


@dataclass
class LogContext:
    """Fields included in every log message within a scope."""

    generator: str | None = None
    model: str | None = None
    module_name: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a dictionary of non-None values."""
        result = {}
        if self.generator is not None:
            result["generator"] = self.generator
        if self.model is not None:
            result["model"] = self.model
        if self.module_name is not None:
            result["module_name"] = self.module_name
        result.update(self.extra)
        return result


def get_log_context() -> dict[str, Any]:
    """Get the current log context."""
    ctx = _log_context.get()
    return ctx.copy() if ctx else {}


@contextmanager
def with_log_context(
    context: LogContext | dict[str, Any] | None = None,
    **kwargs: Any,
) -> Iterator[None]:
    """
    Context manager for setting log context within a scope.

    Nested scopes inherit the enclosing fields unless an explicit context
    replaces them.

    Example:
        with with_log_context(generator="dao"):
            with with_log_context(model="User"):
                logger.info("Generated")  # carries generator and model
    """
    previous = _log_context.get()

    if context is not None:
        new_context = (
            context.to_dict() if isinstance(context, LogContext) else context.copy()
        )
    else:
        new_context = previous.copy() if previous else {}

    new_context.update(kwargs)
    _log_context.set(new_context)

    try:
        yield
    finally:
        _log_context.set(previous)


class ContextFilter(logging.Filter):
    """Logging filter that injects context fields into log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        for key, value in get_log_context().items():
            if not hasattr(record, key):
                setattr(record, key, value)
        return True
