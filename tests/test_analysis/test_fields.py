"""Tests for field metadata extraction."""

from dataclasses import dataclass
from typing import Annotated

import pytest

from daogen.analysis.fields import describe_field, extract_fields, extract_primary_key
from daogen.core.declaration import FieldDeclaration, ModelDeclaration, declare
from daogen.core.errors import DeclarationError, DuplicatePrimaryKeyError, MissingPrimaryKeyError
from daogen.core.markers import BelongsTo, Column, ComputedField, PrimaryKey, Table


def by_name(fields):
    return {f.name: f for f in fields}


class TestExtractFields:
    """Tests for extract_fields()."""

    def test_relationship_fields_excluded(self, user_declaration: ModelDeclaration):
        """Test relationship-bearing fields are left out."""
        fields = extract_fields(user_declaration)
        assert [f.name for f in fields] == ["id", "name"]

    def test_static_fields_excluded(self, profile_declaration: ModelDeclaration):
        """Test ClassVar fields are left out."""
        names = [f.name for f in extract_fields(profile_declaration)]
        assert "VERSION" not in names
        assert names == ["id", "displayName", "avatarUrl", "bio", "followerCount"]

    def test_column_name_derived(self, post_declaration: ModelDeclaration):
        """Test column names default to snake_case."""
        fields = by_name(extract_fields(post_declaration))
        assert fields["userId"].column_name == "user_id"
        assert fields["publishedAt"].column_name == "published_at"
        assert fields["title"].column_name == "title"

    def test_column_override_wins(self, profile_declaration: ModelDeclaration):
        """Test an explicit column name beats the derived one."""
        fields = by_name(extract_fields(profile_declaration))
        assert fields["bio"].column_name == "biography"
        assert fields["id"].column_name == "profile_id"

    def test_nullability(self, post_declaration: ModelDeclaration):
        """Test optional annotations are nullable and unwrapped."""
        fields = by_name(extract_fields(post_declaration))
        assert fields["publishedAt"].nullable is True
        assert fields["publishedAt"].type_name == "str"
        assert fields["title"].nullable is False

    def test_computed_field_excluded_from_writes(self, profile_declaration: ModelDeclaration):
        """Test a computed marker overrides an explicit Column flag."""
        follower_count = by_name(extract_fields(profile_declaration))["followerCount"]
        assert follower_count.computed is True
        assert follower_count.exclude_from_insert is True
        assert follower_count.exclude_from_update is True

    def test_column_flags_and_description(self, profile_declaration: ModelDeclaration):
        """Test Column exclusion flags and description are read."""
        fields = by_name(extract_fields(profile_declaration))
        assert fields["bio"].exclude_from_update is True
        assert fields["bio"].exclude_from_insert is False
        assert fields["displayName"].description == "Public name"

    def test_primary_key_flagged(self, user_declaration: ModelDeclaration):
        """Test the primary key is flagged and never written."""
        id_field = by_name(extract_fields(user_declaration))["id"]
        assert id_field.primary_key is True
        assert id_field.exclude_from_insert is True
        assert id_field.exclude_from_update is True

    def test_generic_type_rendered(self):
        """Test container types are rendered recursively."""
        field = describe_field(
            "Scoreboard", FieldDeclaration(name="scores", annotation=dict[str, list[int]])
        )
        assert field.type_name == "dict[str, list[int]]"


class TestExtractPrimaryKey:
    """Tests for extract_primary_key()."""

    def test_found(self, user_declaration: ModelDeclaration):
        """Test the primary key field is returned."""
        pk = extract_primary_key(user_declaration)
        assert pk.name == "id"
        assert pk.type_name == "int"
        assert pk.column_name == "id"

    def test_column_override_on_primary_key(self, profile_declaration: ModelDeclaration):
        """Test the primary key honours a Column override."""
        assert extract_primary_key(profile_declaration).column_name == "profile_id"

    def test_missing(self):
        """Test a model without a primary key fails with the model name."""
        declaration = ModelDeclaration(
            name="Draft",
            table=Table(name="drafts"),
            fields=[FieldDeclaration(name="title", annotation=str)],
        )
        with pytest.raises(MissingPrimaryKeyError) as exc_info:
            extract_primary_key(declaration)

        assert exc_info.value.details["model"] == "Draft"

    def test_static_primary_key_ignored(self):
        """Test a class-level primary key marker does not count."""
        declaration = ModelDeclaration(
            name="Counter",
            table=Table(name="counters"),
            fields=[
                FieldDeclaration(
                    name="ID", annotation=int, markers=(PrimaryKey(),), is_class_var=True
                ),
            ],
        )
        with pytest.raises(MissingPrimaryKeyError):
            extract_primary_key(declaration)

    def test_duplicate(self):
        """Test several primary keys are rejected."""

        @dataclass
        class Pair:
            left: Annotated[int, PrimaryKey()]
            right: Annotated[int, PrimaryKey()]

        with pytest.raises(DuplicatePrimaryKeyError) as exc_info:
            extract_primary_key(declare(Pair))

        assert exc_info.value.details["fields"] == ["left", "right"]

    def test_computed_and_column_combined(self):
        """Test a Column marker does not undo a ComputedField marker."""

        @dataclass
        class Invoice:
            id: Annotated[int, PrimaryKey()]
            total: Annotated[float, Column(name="grand_total"), ComputedField()] = 0.0

        total = by_name(extract_fields(declare(Invoice)))["total"]
        assert total.column_name == "grand_total"
        assert total.exclude_from_insert is True

    def test_relationship_primary_key_rejected(self):
        """Test a primary key cannot also be a relationship field."""

        @dataclass
        class Account:
            owner: Annotated[int, PrimaryKey(), BelongsTo(foreign_key="owner_id")]
            label: str

        with pytest.raises(DeclarationError) as exc_info:
            extract_primary_key(declare(Account))

        assert exc_info.value.details["model"] == "Account"
        assert "owner" in exc_info.value.details["reason"]


class TestMarkerValues:
    """Tests for decoding malformed Column values."""

    def test_malformed_optional_values_default(self):
        """Test wrongly-typed optional Column values fall back to defaults."""

        @dataclass
        class Badge:
            id: Annotated[int, PrimaryKey()]
            title: Annotated[
                str,
                Column(description=5, exclude_from_insert=None, exclude_from_update="yes"),  # type: ignore[arg-type]
            ]

        title = by_name(extract_fields(declare(Badge)))["title"]
        assert title.description is None
        assert title.exclude_from_insert is False
        assert title.exclude_from_update is False
        assert title.column_name == "title"

    def test_malformed_column_name_rejected(self):
        """Test a non-string column name fails the model."""

        @dataclass
        class Badge:
            id: Annotated[int, PrimaryKey()]
            title: Annotated[str, Column(name=5)]  # type: ignore[arg-type]

        with pytest.raises(DeclarationError) as exc_info:
            extract_fields(declare(Badge))

        assert exc_info.value.details["model"] == "Badge"

    def test_empty_column_name_rejected(self):
        """Test an empty column name fails the model."""

        @dataclass
        class Badge:
            id: Annotated[int, PrimaryKey(), Column(name="")]

        with pytest.raises(DeclarationError):
            extract_primary_key(declare(Badge))
