"""Tests for the runtime contract used by generated code."""

from dataclasses import dataclass
from typing import Any

import pytest

from daogen.runtime import BaseDAO, KeyPath, RelationshipMetadata, UnsupportedFieldWriteError


@dataclass
class Widget:
    id: int
    parts: list[Any]


class WidgetDAO(BaseDAO[Widget]):
    def __init__(self, client: Any) -> None:
        super().__init__(client, "widgets")
        self.register_relationship(
            RelationshipMetadata(type="HasMany", field_name="parts", related_class=object, foreign_key="widget_id")
        )

    @property
    def table_name(self) -> str:
        return "widgets"

    def from_json(self, json: dict[str, Any]) -> Widget:
        return Widget(id=json["id"], parts=[])

    def to_json(self, entity: Widget) -> dict[str, Any]:
        return {"id": entity.id}

    def get_primary_key(self, entity: Widget) -> int:
        return entity.id

    def get_field_value(self, entity: Widget, field_name: str) -> Any:
        return getattr(entity, field_name, None)

    def set_field_value(self, entity: Widget, field_name: str, value: Any) -> None:
        if field_name != "parts":
            raise UnsupportedFieldWriteError(field_name, "Widget")
        entity.parts = value


class TestBaseDAO:
    """Tests for BaseDAO."""

    def test_abstract(self):
        """Test the base class cannot be instantiated."""
        with pytest.raises(TypeError):
            BaseDAO(None, "widgets")  # type: ignore[abstract]

    def test_client_kept(self):
        """Test the client is stored for the query layer."""
        client = object()
        assert WidgetDAO(client).client is client

    def test_relationship_registry(self):
        """Test relationships are looked up by field name."""
        dao = WidgetDAO(None)

        assert dao.relationship("parts").foreign_key == "widget_id"
        assert dao.relationship("missing") is None
        assert len(dao.relationships) == 1

    def test_reregistration_replaces(self):
        """Test registering a field again replaces the earlier entry."""
        dao = WidgetDAO(None)
        dao.register_relationship(
            RelationshipMetadata(type="HasOne", field_name="parts", related_class=object, foreign_key="w_id")
        )

        assert len(dao.relationships) == 1
        assert dao.relationship("parts").type == "HasOne"


class TestKeyPath:
    """Tests for KeyPath."""

    def test_column(self):
        """Test a key path renders as its column name."""
        path: KeyPath[Widget, int] = KeyPath("id")
        assert path.column == "id"
        assert str(path) == "id"

    def test_value_semantics(self):
        """Test key paths compare and hash by column."""
        assert KeyPath("id") == KeyPath("id")
        assert len({KeyPath("id"), KeyPath("id"), KeyPath("name")}) == 2
