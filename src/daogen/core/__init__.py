"""
daogen core module.

Contains the declarative markers, model declarations, descriptor types and
the error taxonomy.
"""

from daogen.core.declaration import FieldDeclaration, ModelDeclaration, declare
from daogen.core.errors import (
    AmbiguousRelationshipError,
    DaoGenError,
    DeclarationError,
    DuplicatePrimaryKeyError,
    InvalidRelationshipError,
    MissingConstructorError,
    MissingPrimaryKeyError,
    UnsupportedFieldWriteError,
)
from daogen.core.markers import (
    BelongsTo,
    Column,
    ComputedField,
    HasMany,
    HasOne,
    ManyToMany,
    PrimaryKey,
    Table,
    table,
)
from daogen.core.types import (
    ConstructorSignature,
    FieldDescriptor,
    ModelDescriptor,
    RelationKind,
    RelationshipDescriptor,
)

__all__ = [
    # Declarations
    "FieldDeclaration",
    "ModelDeclaration",
    "declare",
    # Errors
    "DaoGenError",
    "DeclarationError",
    "MissingPrimaryKeyError",
    "DuplicatePrimaryKeyError",
    "MissingConstructorError",
    "AmbiguousRelationshipError",
    "InvalidRelationshipError",
    "UnsupportedFieldWriteError",
    # Markers
    "BelongsTo",
    "Column",
    "ComputedField",
    "HasMany",
    "HasOne",
    "ManyToMany",
    "PrimaryKey",
    "Table",
    "table",
    # Types
    "ConstructorSignature",
    "FieldDescriptor",
    "ModelDescriptor",
    "RelationKind",
    "RelationshipDescriptor",
]
