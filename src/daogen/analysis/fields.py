"""
Field metadata extraction.

Reads the plain fields of a model declaration into FieldDescriptors.
Relationship-bearing fields are left to the relationship analyzer.
"""

from daogen.analysis.values import optional_bool, optional_str, required_str
from daogen.core.declaration import FieldDeclaration, ModelDeclaration
from daogen.core.errors import DeclarationError, DuplicatePrimaryKeyError, MissingPrimaryKeyError
from daogen.core.markers import Column, ComputedField, PrimaryKey
from daogen.core.naming import render_type, split_optional, to_snake_case
from daogen.core.types import FieldDescriptor


def extract_fields(declaration: ModelDeclaration) -> list[FieldDescriptor]:
    """
    Extract plain field descriptors in declaration order.

    Static fields and fields carrying a relationship marker are skipped.
    """
    return [
        describe_field(declaration.name, field)
        for field in declaration.instance_fields
        if not field.relationship_markers
    ]


def extract_primary_key(declaration: ModelDeclaration) -> FieldDescriptor:
    """
    Locate the single primary-key field.

    Raises:
        MissingPrimaryKeyError: If no field carries the PrimaryKey marker
        DuplicatePrimaryKeyError: If several fields carry it
        DeclarationError: If the primary key is also a relationship field
    """
    candidates = [
        field for field in declaration.instance_fields if field.has_marker(PrimaryKey)
    ]
    if not candidates:
        raise MissingPrimaryKeyError(declaration.name)
    if len(candidates) > 1:
        raise DuplicatePrimaryKeyError(declaration.name, [f.name for f in candidates])
    if candidates[0].relationship_markers:
        raise DeclarationError(
            declaration.name,
            f"primary key '{candidates[0].name}' cannot carry a relationship marker",
        )
    return describe_field(declaration.name, candidates[0])


def describe_field(model: str, field: FieldDeclaration) -> FieldDescriptor:
    """
    Build the descriptor of a single plain field from its markers.

    Raises:
        DeclarationError: If a Column marker carries a malformed name
    """
    inner, nullable = split_optional(field.annotation)

    column_name = to_snake_case(field.name)
    exclude_from_insert = False
    exclude_from_update = False
    description = None

    column = field.marker(Column)
    if column is not None:
        if column.name is not None:
            column_name = required_str(model, field.name, column, "name")
        exclude_from_insert = optional_bool(column.exclude_from_insert)
        exclude_from_update = optional_bool(column.exclude_from_update)
        description = optional_str(column.description)

    return FieldDescriptor(
        name=field.name,
        type_name=render_type(inner),
        column_name=column_name,
        nullable=nullable,
        primary_key=field.has_marker(PrimaryKey),
        computed=field.has_marker(ComputedField),
        exclude_from_insert=exclude_from_insert,
        exclude_from_update=exclude_from_update,
        description=description,
    )

