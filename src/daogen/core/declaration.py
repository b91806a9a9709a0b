"""
Model declarations.

A ModelDeclaration is the explicit schema descriptor every generation pass
consumes. It can be written as a literal or read from an annotated Python
class with ``declare``.
"""

import inspect
from typing import Annotated, Any, ClassVar, TypeVar, get_args, get_origin, get_type_hints

from pydantic import BaseModel, Field

from daogen.core.errors import DeclarationError
from daogen.core.markers import TABLE_ATTRIBUTE, Marker, RelationshipMarker, Table
from daogen.core.naming import to_snake_case
from daogen.core.types import ConstructorSignature

M = TypeVar("M", bound=Marker)


class FieldDeclaration(BaseModel):
    """One declared attribute of a model class."""

    name: str
    annotation: Any
    markers: tuple[Any, ...] = ()
    is_class_var: bool = False

    model_config = {"frozen": True}

    def marker(self, kind: type[M]) -> M | None:
        """Return the first marker of the given kind, if any."""
        for marker in self.markers:
            if isinstance(marker, kind):
                return marker
        return None

    def has_marker(self, kind: type[Marker]) -> bool:
        """Check whether the field carries a marker of the given kind."""
        return self.marker(kind) is not None

    @property
    def relationship_markers(self) -> list[RelationshipMarker]:
        """Relationship markers on this field, in annotation order."""
        return [m for m in self.markers if isinstance(m, RelationshipMarker)]


class ModelDeclaration(BaseModel):
    """Declarative description of one model, as consumed by the generators."""

    name: str
    table: Table
    fields: list[FieldDeclaration] = Field(default_factory=list)
    has_from_json: bool = False
    has_to_json: bool = False
    constructor: ConstructorSignature | None = None

    model_config = {"frozen": True}

    @property
    def instance_fields(self) -> list[FieldDeclaration]:
        """Declared fields excluding class-level (static) ones."""
        return [f for f in self.fields if not f.is_class_var]


def declare(model: type, namespace: dict[str, Any] | None = None) -> ModelDeclaration:
    """
    Build a ModelDeclaration from an annotated class.

    Args:
        model: Model class whose fields carry Annotated markers
        namespace: Extra names used to resolve forward references

    Returns:
        The model's declaration

    Raises:
        DeclarationError: If an annotation cannot be resolved
    """
    name = model.__name__
    if issubclass(model, BaseModel):
        fields = _declare_pydantic_fields(model)
    else:
        fields = _declare_class_fields(model, namespace)

    table = model.__dict__.get(TABLE_ATTRIBUTE)
    if table is None:
        table = Table(name=to_snake_case(name))

    return ModelDeclaration(
        name=name,
        table=table,
        fields=fields,
        has_from_json=_has_classlevel_routine(model, "from_json"),
        has_to_json=callable(getattr(model, "to_json", None)),
        constructor=_read_constructor(model),
    )


def _declare_class_fields(model: type, namespace: dict[str, Any] | None) -> list[FieldDeclaration]:
    """Read fields from the resolved type hints of a plain or dataclass model."""
    name = model.__name__
    try:
        hints = get_type_hints(model, localns=namespace, include_extras=True)
    except NameError as exc:
        raise DeclarationError(
            name,
            f"unresolved type reference ({exc})",
            retry_hints=["Pass the missing names through the namespace argument"],
        ) from exc

    return [
        _declare_field(field_name, hint)
        for field_name, hint in hints.items()
        if not field_name.startswith("__")
    ]


def _declare_pydantic_fields(model: type[BaseModel]) -> list[FieldDeclaration]:
    """Read fields of a pydantic model, which keeps Annotated metadata on FieldInfo."""
    fields = []
    for field_name, info in model.model_fields.items():
        markers = tuple(m for m in info.metadata if isinstance(m, Marker))
        fields.append(FieldDeclaration(name=field_name, annotation=info.annotation, markers=markers))
    return fields


def _declare_field(name: str, hint: Any) -> FieldDeclaration:
    """Split a resolved type hint into its annotation and markers."""
    markers: list[Marker] = []
    annotation = hint
    while get_origin(annotation) is Annotated:
        base, *metadata = get_args(annotation)
        markers.extend(m for m in metadata if isinstance(m, Marker))
        annotation = base

    is_class_var = annotation is ClassVar or get_origin(annotation) is ClassVar
    return FieldDeclaration(
        name=name,
        annotation=annotation,
        markers=tuple(markers),
        is_class_var=is_class_var,
    )


def _read_constructor(model: type) -> ConstructorSignature | None:
    """Read the keyword parameters of the model's constructor."""
    try:
        signature = inspect.signature(model)
    except (TypeError, ValueError):
        return None

    parameters = []
    required = []
    accepts_kwargs = False
    for param in signature.parameters.values():
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            accepts_kwargs = True
            continue
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            continue
        if param.kind is not inspect.Parameter.POSITIONAL_ONLY:
            parameters.append(param.name)
        if param.default is inspect.Parameter.empty:
            required.append(param.name)

    return ConstructorSignature(
        parameters=tuple(parameters),
        required=tuple(required),
        accepts_kwargs=accepts_kwargs,
    )


def _has_classlevel_routine(model: type, name: str) -> bool:
    """Check for a classmethod or staticmethod callable as ``Model.name(...)``."""
    try:
        attribute = inspect.getattr_static(model, name)
    except AttributeError:
        return False
    return isinstance(attribute, (classmethod, staticmethod))
