"""
Relationship analysis.

Classifies relationship-bearing fields into the four relationship kinds and
decodes their marker arguments.
"""

from daogen.analysis.values import optional_bool, optional_str, required_str
from daogen.core.declaration import FieldDeclaration, ModelDeclaration
from daogen.core.errors import AmbiguousRelationshipError, InvalidRelationshipError
from daogen.core.markers import (
    BelongsTo,
    Column,
    HasMany,
    HasOne,
    ManyToMany,
    RelationshipMarker,
)
from daogen.core.naming import render_type, sequence_element, split_optional
from daogen.core.types import RelationKind, RelationshipDescriptor
from daogen.logging import get_logger

logger = get_logger(__name__)

# Order used to pick a marker when non-strict analysis meets several on one field.
MARKER_PRECEDENCE: list[tuple[type[RelationshipMarker], RelationKind]] = [
    (BelongsTo, RelationKind.MANY_TO_ONE),
    (HasMany, RelationKind.ONE_TO_MANY),
    (HasOne, RelationKind.ONE_TO_ONE),
    (ManyToMany, RelationKind.MANY_TO_MANY),
]


def extract_relationships(
    declaration: ModelDeclaration,
    *,
    strict: bool = True,
) -> dict[str, RelationshipDescriptor]:
    """
    Extract relationship descriptors keyed by field name.

    The mapping preserves field declaration order.

    Args:
        declaration: Model declaration to analyze
        strict: Reject fields carrying more than one relationship marker
            instead of applying MARKER_PRECEDENCE

    Raises:
        AmbiguousRelationshipError: Several markers on one field in strict mode
        InvalidRelationshipError: A to-many marker on a non-sequence field
        DeclarationError: A malformed foreign_key, related_key or pivot_table
    """
    relationships: dict[str, RelationshipDescriptor] = {}
    for field in declaration.instance_fields:
        markers = field.relationship_markers
        if not markers:
            continue
        if strict and len(markers) > 1:
            raise AmbiguousRelationshipError(
                declaration.name,
                field.name,
                [type(m).__name__ for m in markers],
            )
        marker, kind = classify(markers)
        if len(markers) > 1:
            logger.warning(
                "Multiple relationship markers on field; extra markers ignored",
                model=declaration.name,
                field=field.name,
                kept=type(marker).__name__,
            )
        relationships[field.name] = _describe(declaration.name, field, marker, kind)
    return relationships


def classify(markers: list[RelationshipMarker]) -> tuple[RelationshipMarker, RelationKind]:
    """Pick the winning marker and its kind by MARKER_PRECEDENCE."""
    for marker_type, kind in MARKER_PRECEDENCE:
        for marker in markers:
            if isinstance(marker, marker_type):
                return marker, kind
    raise ValueError(f"Not a relationship marker: {markers!r}")


def _describe(
    model: str,
    field: FieldDeclaration,
    marker: RelationshipMarker,
    kind: RelationKind,
) -> RelationshipDescriptor:
    column = field.marker(Column)
    description = optional_str(column.description) if column is not None else None
    foreign_key = required_str(model, field.name, marker, "foreign_key")

    options: dict[str, str] = {}
    if isinstance(marker, ManyToMany):
        options = {
            "join_table": required_str(model, field.name, marker, "pivot_table"),
            "source_key": foreign_key,
            "target_key": required_str(model, field.name, marker, "related_key"),
        }

    return RelationshipDescriptor(
        field_name=field.name,
        kind=kind,
        related_type=related_type_name(model, field, kind),
        foreign_key=foreign_key,
        eager=optional_bool(marker.eager),
        where=optional_str(marker.where),
        description=description,
        **options,
    )


def related_type_name(model: str, field: FieldDeclaration, kind: RelationKind) -> str:
    """
    Name of the entity on the other side of a relationship.

    To-many relationships use the element type of the field's sequence;
    to-one relationships use the field's own type.
    """
    if kind.is_to_many:
        element = sequence_element(field.annotation)
        if element is None:
            raise InvalidRelationshipError(
                model,
                field.name,
                f"{kind.registration_tag} requires a sequence type, "
                f"got {render_type(field.annotation)}",
            )
        return render_type(element)

    inner, _ = split_optional(field.annotation)
    return render_type(inner)
