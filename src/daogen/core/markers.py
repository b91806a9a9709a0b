"""
Declarative markers for model classes.

Field markers are attached with ``typing.Annotated``; the table marker is
attached with the ``table`` class decorator:

    @table("users")
    @dataclass
    class User:
        id: Annotated[int, PrimaryKey()]
        display_name: Annotated[str, Column(name="name")]
        posts: Annotated[list[Post], HasMany(foreign_key="user_id")] = field(default_factory=list)
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from pydantic import BaseModel

TABLE_ATTRIBUTE = "__daogen_table__"

_C = TypeVar("_C", bound=type)


@dataclass(frozen=True, kw_only=True)
class Marker:
    """Base class for all field markers."""


@dataclass(frozen=True, kw_only=True)
class Column(Marker):
    """Column mapping override for a field."""

    name: str | None = None
    exclude_from_insert: bool = False
    exclude_from_update: bool = False
    description: str | None = None


@dataclass(frozen=True, kw_only=True)
class PrimaryKey(Marker):
    """Marks the primary-key field."""


@dataclass(frozen=True, kw_only=True)
class ComputedField(Marker):
    """Marks a field that is derived elsewhere and never written."""


@dataclass(frozen=True, kw_only=True)
class RelationshipMarker(Marker):
    """Base class for the four relationship markers."""

    foreign_key: str
    eager: bool = False
    where: str | None = None


@dataclass(frozen=True, kw_only=True)
class BelongsTo(RelationshipMarker):
    """Many-to-one: the field holds the single parent entity."""


@dataclass(frozen=True, kw_only=True)
class HasMany(RelationshipMarker):
    """One-to-many: the field holds a sequence of child entities."""


@dataclass(frozen=True, kw_only=True)
class HasOne(RelationshipMarker):
    """One-to-one: the field holds the single related entity."""


@dataclass(frozen=True, kw_only=True)
class ManyToMany(RelationshipMarker):
    """Many-to-many through a pivot table."""

    related_key: str
    pivot_table: str


class Table(BaseModel):
    """Model-level marker: table name and per-pass opt-outs."""

    name: str
    generate_dao: bool = True
    generate_keypaths: bool = True

    model_config = {"frozen": True}


def table(
    name: str,
    *,
    generate_dao: bool = True,
    generate_keypaths: bool = True,
) -> Callable[[_C], _C]:
    """
    Class decorator attaching a Table marker to a model class.

    Args:
        name: Database table name
        generate_dao: Emit a DAO class for this model
        generate_keypaths: Emit a key-path class for this model
    """

    def decorator(cls: _C) -> _C:
        setattr(
            cls,
            TABLE_ATTRIBUTE,
            Table(name=name, generate_dao=generate_dao, generate_keypaths=generate_keypaths),
        )
        return cls

    return decorator
