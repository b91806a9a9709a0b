"""
Shared type definitions for daogen.

Descriptors are built fresh for each model on every generation pass and
discarded once the model's code has been emitted.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field, model_validator


class RelationKind(str, Enum):
    """Supported relationship kinds."""

    ONE_TO_MANY = "one_to_many"
    MANY_TO_ONE = "many_to_one"
    ONE_TO_ONE = "one_to_one"
    MANY_TO_MANY = "many_to_many"

    @property
    def registration_tag(self) -> str:
        """Tag used by the runtime when registering the relationship."""
        return _REGISTRATION_TAGS[self]

    @property
    def is_to_many(self) -> bool:
        """Whether the relationship field holds a sequence of entities."""
        return self in (RelationKind.ONE_TO_MANY, RelationKind.MANY_TO_MANY)


_REGISTRATION_TAGS: dict[RelationKind, str] = {
    RelationKind.ONE_TO_MANY: "HasMany",
    RelationKind.MANY_TO_ONE: "BelongsTo",
    RelationKind.ONE_TO_ONE: "HasOne",
    RelationKind.MANY_TO_MANY: "ManyToMany",
}


class FieldDescriptor(BaseModel):
    """Metadata for a plain (non-relationship) model field."""

    name: str
    type_name: str
    column_name: str
    nullable: bool = False
    primary_key: bool = False
    computed: bool = False
    exclude_from_insert: bool = False
    exclude_from_update: bool = False
    description: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="before")
    @classmethod
    def _force_write_exclusions(cls, data: Any) -> Any:
        # Primary keys and computed fields are never written.
        if isinstance(data, dict) and (data.get("primary_key") or data.get("computed")):
            data = {**data, "exclude_from_insert": True, "exclude_from_update": True}
        return data


class RelationshipDescriptor(BaseModel):
    """Metadata for a relationship-bearing field."""

    field_name: str
    kind: RelationKind
    related_type: str
    foreign_key: str
    join_table: str | None = None
    source_key: str | None = None
    target_key: str | None = None
    eager: bool = False
    where: str | None = None
    description: str | None = None

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _join_keys_only_for_many_to_many(self) -> "RelationshipDescriptor":
        if self.kind is not RelationKind.MANY_TO_MANY:
            extra = [
                name
                for name in ("join_table", "source_key", "target_key")
                if getattr(self, name) is not None
            ]
            if extra:
                raise ValueError(
                    f"{', '.join(extra)} only apply to many-to-many relationships"
                )
        return self

    @property
    def related_key(self) -> str | None:
        """Key of the related entity in the join table (many-to-many only)."""
        return self.target_key


class ConstructorSignature(BaseModel):
    """Keyword parameters accepted by a model's plain constructor."""

    parameters: tuple[str, ...] = ()
    required: tuple[str, ...] = ()
    accepts_kwargs: bool = False

    model_config = {"frozen": True}

    def accepts(self, name: str) -> bool:
        """Check whether the constructor can be called with ``name=...``."""
        return self.accepts_kwargs or name in self.parameters

    def unsatisfied(self, names: list[str]) -> list[str]:
        """Required parameters left unset when called with only ``names``."""
        return [param for param in self.required if param not in names]


class ModelDescriptor(BaseModel):
    """Everything the synthesizers need to emit code for one model."""

    name: str
    table_name: str
    fields: list[FieldDescriptor] = Field(default_factory=list)
    primary_key: FieldDescriptor
    relationships: list[RelationshipDescriptor] = Field(default_factory=list)
    has_from_json: bool = False
    has_to_json: bool = False
    constructor: ConstructorSignature | None = None
    generate_dao: bool = True
    generate_keypaths: bool = True

    model_config = {"frozen": True}

    def relationship_map(self) -> dict[str, RelationshipDescriptor]:
        """Relationships keyed by field name, in declaration order."""
        return {rel.field_name: rel for rel in self.relationships}

    def field_names(self) -> list[str]:
        """Plain field names in declaration order."""
        return [f.name for f in self.fields]

    def relationship_names(self) -> list[str]:
        """Relationship field names in declaration order."""
        return [rel.field_name for rel in self.relationships]

    def insert_columns(self) -> list[str]:
        """Columns written on insert."""
        return [f.column_name for f in self.fields if not f.exclude_from_insert]

    def update_columns(self) -> list[str]:
        """Columns written on update."""
        return [f.column_name for f in self.fields if not f.exclude_from_update]
