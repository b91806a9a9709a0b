"""
Shared test fixtures.
"""

import logging
from dataclasses import dataclass, field
from typing import Annotated, Any, ClassVar

import pytest

from daogen.config import DEFAULT_SETTINGS, GeneratorSettings
from daogen.core.declaration import ModelDeclaration, declare
from daogen.core.markers import (
    BelongsTo,
    Column,
    ComputedField,
    HasMany,
    HasOne,
    ManyToMany,
    PrimaryKey,
    table,
)
from daogen.logging.config import ROOT_LOGGER_NAME

# === Test Models ===


@table("users")
@dataclass
class User:
    id: Annotated[int, PrimaryKey()]
    name: str
    posts: Annotated[list["Post"], HasMany(foreign_key="user_id")] = field(default_factory=list)


@table("tags")
@dataclass
class Tag:
    id: Annotated[int, PrimaryKey()]
    label: str


@table("posts")
@dataclass
class Post:
    id: Annotated[int, PrimaryKey()]
    title: str
    userId: int
    publishedAt: str | None = None
    author: Annotated[User | None, BelongsTo(foreign_key="user_id", eager=True)] = None
    tags: Annotated[
        list[Tag],
        ManyToMany(foreign_key="post_id", related_key="tag_id", pivot_table="post_tags"),
    ] = field(default_factory=list)


@table("profiles", generate_keypaths=False)
@dataclass
class Profile:
    VERSION: ClassVar[int] = 1

    id: Annotated[int, PrimaryKey(), Column(name="profile_id")]
    displayName: Annotated[str, Column(description="Public name")]
    avatarUrl: str | None = None
    bio: Annotated[str | None, Column(name="biography", exclude_from_update=True)] = None
    followerCount: Annotated[int, ComputedField(), Column(exclude_from_insert=False)] = 0
    owner: Annotated[User | None, HasOne(foreign_key="profile_id", where="active = true")] = None


@table("comments")
class Comment:
    id: Annotated[int, PrimaryKey()]
    body: str

    def __init__(self, id: int, body: str) -> None:
        self.id = id
        self.body = body

    @classmethod
    def from_json(cls, json: dict[str, Any]) -> "Comment":
        return cls(id=json["comment_id"], body=json["text"])

    def to_json(self) -> dict[str, Any]:
        return {"comment_id": self.id, "text": self.body}


@table("drafts")
@dataclass
class Draft:
    title: str
    body: str | None = None


@table("opaque")
class Opaque:
    id: Annotated[int, PrimaryKey()]
    payload: str


MODELS = [User, Tag, Post, Profile, Comment]

MODEL_NAMESPACE: dict[str, Any] = {
    cls.__name__: cls for cls in [User, Tag, Post, Profile, Comment, Draft, Opaque]
}


# === Fixtures ===


@pytest.fixture
def settings() -> GeneratorSettings:
    """Default generator settings."""
    return DEFAULT_SETTINGS


@pytest.fixture
def user_declaration() -> ModelDeclaration:
    """Declaration of the User model."""
    return declare(User)


@pytest.fixture
def post_declaration() -> ModelDeclaration:
    """Declaration of the Post model."""
    return declare(Post)


@pytest.fixture
def profile_declaration() -> ModelDeclaration:
    """Declaration of the Profile model."""
    return declare(Profile)


@pytest.fixture
def comment_declaration() -> ModelDeclaration:
    """Declaration of the Comment model."""
    return declare(Comment)


@pytest.fixture
def models() -> list[type]:
    """Well-formed model classes."""
    return list(MODELS)


@pytest.fixture
def load_generated():
    """Execute generated module source against the test models."""

    def _load(content: str) -> dict[str, Any]:
        namespace: dict[str, Any] = dict(MODEL_NAMESPACE)
        exec(compile(content, "<generated>", "exec"), namespace)
        return namespace

    return _load


@pytest.fixture(autouse=True)
def reset_daogen_logger():
    """Undo configure_logging() so caplog keeps seeing daogen records."""
    yield
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.handlers.clear()
    root.setLevel(logging.NOTSET)
    root.propagate = True


@pytest.fixture
def broken_models() -> list[type]:
    """Models the DAO pass must reject: no primary key, no constructor."""
    return [Draft, Opaque]
