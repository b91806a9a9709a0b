"""
Error taxonomy for daogen.

All daogen errors inherit from DaoGenError and include:
- A unique error code for programmatic handling
- A human-readable message naming the offending model or field
- Optional hints describing how to fix the declaration

Every error except UnsupportedFieldWriteError is raised at generation time
and aborts only the model it names. UnsupportedFieldWriteError is raised by
generated DAO code at runtime.
"""

from typing import Any


class DaoGenError(Exception):
    """
    Base class for all daogen errors.

    Attributes:
        code: Unique error code for programmatic handling
        message: Human-readable error message
        retry_hints: Suggestions for how to fix the declaration
        details: Additional error context
    """

    code: str = "DAOGEN_ERROR"

    def __init__(
        self,
        message: str,
        *,
        retry_hints: list[str] | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.retry_hints = retry_hints or []
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to a dictionary for serialization."""
        return {
            "code": self.code,
            "message": self.message,
            "retry_hints": self.retry_hints,
            "details": self.details,
        }


class DeclarationError(DaoGenError):
    """A model class could not be turned into a declaration."""

    code = "INVALID_DECLARATION"

    def __init__(
        self,
        model: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Cannot read declaration of model '{model}': {reason}",
            details={"model": model, "reason": reason},
            **kwargs,
        )


class MissingPrimaryKeyError(DaoGenError):
    """No field of the model carries the PrimaryKey marker."""

    code = "MISSING_PRIMARY_KEY"

    def __init__(self, model: str, **kwargs: Any) -> None:
        super().__init__(
            f"Model '{model}' must have a field annotated with PrimaryKey",
            retry_hints=[f"Mark exactly one field of {model} with Annotated[..., PrimaryKey()]"],
            details={"model": model},
            **kwargs,
        )


class DuplicatePrimaryKeyError(DaoGenError):
    """More than one field of the model carries the PrimaryKey marker."""

    code = "DUPLICATE_PRIMARY_KEY"

    def __init__(self, model: str, fields: list[str], **kwargs: Any) -> None:
        super().__init__(
            f"Model '{model}' has more than one primary key: {', '.join(fields)}",
            retry_hints=["Composite primary keys are not supported; keep a single PrimaryKey marker"],
            details={"model": model, "fields": fields},
            **kwargs,
        )


class MissingConstructorError(DaoGenError):
    """The model has neither a from_json routine nor a usable constructor."""

    code = "MISSING_CONSTRUCTOR"

    def __init__(
        self,
        model: str,
        missing_parameters: list[str] | None = None,
        required_parameters: list[str] | None = None,
        **kwargs: Any,
    ) -> None:
        hints = [f"Add a from_json classmethod to {model}, or make it a dataclass"]
        if missing_parameters:
            hints.append(f"Constructor does not accept: {', '.join(missing_parameters)}")
        if required_parameters:
            hints.append(
                f"Give these constructor parameters a default: {', '.join(required_parameters)}"
            )
        super().__init__(
            f"Model '{model}' must have a from_json routine or a constructor accepting its fields",
            retry_hints=hints,
            details={
                "model": model,
                "missing_parameters": missing_parameters or [],
                "required_parameters": required_parameters or [],
            },
            **kwargs,
        )


class AmbiguousRelationshipError(DaoGenError):
    """A field carries more than one relationship marker."""

    code = "AMBIGUOUS_RELATIONSHIP"

    def __init__(
        self,
        model: str,
        field: str,
        markers: list[str],
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Field '{field}' on model '{model}' has multiple relationship markers: "
            f"{', '.join(markers)}",
            retry_hints=["Keep exactly one of BelongsTo, HasMany, HasOne, ManyToMany"],
            details={"model": model, "field": field, "markers": markers},
            **kwargs,
        )


class InvalidRelationshipError(DaoGenError):
    """A relationship marker does not fit the field it is attached to."""

    code = "INVALID_RELATIONSHIP"

    def __init__(
        self,
        model: str,
        field: str,
        reason: str,
        **kwargs: Any,
    ) -> None:
        super().__init__(
            f"Invalid relationship '{field}' on model '{model}': {reason}",
            details={"model": model, "field": field, "reason": reason},
            **kwargs,
        )


class UnsupportedFieldWriteError(DaoGenError):
    """A generated DAO was asked to set a field it cannot write."""

    code = "UNSUPPORTED_FIELD_WRITE"

    def __init__(self, field: str, model: str, **kwargs: Any) -> None:
        super().__init__(
            f"Cannot set field '{field}' on {model}",
            retry_hints=["Only relationship fields can be set through a DAO"],
            details={"field": field, "model": model},
            **kwargs,
        )
