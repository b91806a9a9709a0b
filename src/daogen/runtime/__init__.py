"""
Runtime types imported by generated DAO and key-path modules.
"""

from daogen.runtime.base import (
    BaseDAO,
    KeyPath,
    RelationshipMetadata,
    RelationshipType,
    UnsupportedFieldWriteError,
)

__all__ = [
    "BaseDAO",
    "KeyPath",
    "RelationshipMetadata",
    "RelationshipType",
    "UnsupportedFieldWriteError",
]
