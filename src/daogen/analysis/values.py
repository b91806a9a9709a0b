"""
Marker value decoding.

Marker arguments are whatever the model author wrote. Optional values that
are absent or of the wrong type fall back to their defaults; required
values that are malformed fail the model with a DeclarationError.
"""

from typing import Any

from daogen.core.errors import DeclarationError
from daogen.logging import get_logger

logger = get_logger(__name__)


def optional_bool(value: Any, default: bool = False) -> bool:
    """Decode an optional flag; non-bool values give the default."""
    if isinstance(value, bool):
        return value
    if value is not None:
        logger.debug("Ignoring non-bool marker value", value=repr(value))
    return default


def optional_str(value: Any) -> str | None:
    """Decode an optional string; non-str values give None."""
    if isinstance(value, str):
        return value
    if value is not None:
        logger.debug("Ignoring non-str marker value", value=repr(value))
    return None


def required_str(model: str, field: str, marker: object, argument: str) -> str:
    """
    Decode a required, non-empty string marker argument.

    Raises:
        DeclarationError: If the argument is missing, empty or not a string
    """
    value = getattr(marker, argument, None)
    if not isinstance(value, str) or not value:
        raise DeclarationError(
            model,
            f"{type(marker).__name__}.{argument} on field '{field}' must be a "
            f"non-empty string, got {value!r}",
        )
    return value
