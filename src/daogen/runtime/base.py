"""
Runtime contract for generated code.

Generated DAO classes subclass BaseDAO and register RelationshipMetadata in
their constructors; generated key-path classes expose KeyPath constants.
Query execution belongs to the concrete client, not to this module.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, Literal, TypeVar

from daogen.core.errors import UnsupportedFieldWriteError

T = TypeVar("T")
E = TypeVar("E")
V = TypeVar("V")

RelationshipType = Literal["HasMany", "BelongsTo", "HasOne", "ManyToMany"]


@dataclass(frozen=True)
class RelationshipMetadata:
    """A relationship registered by a generated DAO constructor."""

    type: RelationshipType
    field_name: str
    related_class: Any
    foreign_key: str
    pivot_table: str | None = None
    related_key: str | None = None


@dataclass(frozen=True)
class KeyPath(Generic[E, V]):
    """Typed column reference used to build query filters."""

    column: str

    def __str__(self) -> str:
        return self.column


class BaseDAO(ABC, Generic[T]):
    """
    Base class of every generated DAO.

    Subclasses map between entities and column/value records; the client is
    kept for the query layer built on top of this class.
    """

    def __init__(self, client: Any, table: str) -> None:
        self.client = client
        self._table = table
        self._relationships: dict[str, RelationshipMetadata] = {}

    def register_relationship(self, metadata: RelationshipMetadata) -> None:
        """Register a relationship, keyed by its field name."""
        self._relationships[metadata.field_name] = metadata

    @property
    def relationships(self) -> list[RelationshipMetadata]:
        """Registered relationships in registration order."""
        return list(self._relationships.values())

    def relationship(self, field_name: str) -> RelationshipMetadata | None:
        """Look up a registered relationship by field name."""
        return self._relationships.get(field_name)

    @property
    @abstractmethod
    def table_name(self) -> str:
        """Name of the table backing this DAO."""
        ...

    @abstractmethod
    def from_json(self, json: dict[str, Any]) -> T:
        """Build an entity from a column/value record."""
        ...

    @abstractmethod
    def to_json(self, entity: T) -> dict[str, Any]:
        """Convert an entity to a column/value record."""
        ...

    @abstractmethod
    def get_primary_key(self, entity: T) -> Any:
        """Return the entity's primary-key value."""
        ...

    @abstractmethod
    def get_field_value(self, entity: T, field_name: str) -> Any:
        """Read a field by name; unknown names return None."""
        ...

    @abstractmethod
    def set_field_value(self, entity: T, field_name: str, value: Any) -> None:
        """Write a relationship field by name."""
        ...


__all__ = [
    "BaseDAO",
    "KeyPath",
    "RelationshipMetadata",
    "RelationshipType",
    "UnsupportedFieldWriteError",
]
