"""
Name and type rendering helpers.

Column names and type names end up verbatim in generated source, so every
function here is a pure, deterministic function of its input.
"""

import collections.abc
import types
import typing
from typing import Annotated, Any, ForwardRef, Union, get_args, get_origin

# Container origins treated as "a sequence of entities" by to-many relationships.
SEQUENCE_ORIGINS: tuple[Any, ...] = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
    collections.abc.Iterable,
    collections.abc.Collection,
)

_NONE_TYPE = type(None)


def to_snake_case(name: str) -> str:
    """
    Convert a camelCase or CamelCase name to snake_case.

    Already snake_cased names are returned unchanged, so the conversion is
    idempotent: ``userId`` -> ``user_id``, ``user_id`` -> ``user_id``.
    """
    result = []
    for i, char in enumerate(name):
        if char.isupper():
            if i > 0 and result[-1] != "_":
                result.append("_")
            result.append(char.lower())
        else:
            result.append(char)
    return "".join(result)


def strip_annotated(annotation: Any) -> Any:
    """Drop ``Annotated`` metadata, returning the underlying type."""
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def _is_union(annotation: Any) -> bool:
    origin = get_origin(annotation)
    return origin is Union or origin is types.UnionType


def split_optional(annotation: Any) -> tuple[Any, bool]:
    """
    Split ``X | None`` / ``Optional[X]`` into ``(X, True)``.

    Non-optional annotations are returned as ``(annotation, False)``. Unions of
    several non-None members keep the remaining members as a union.
    """
    annotation = strip_annotated(annotation)
    if isinstance(annotation, str):
        parts = [part.strip() for part in annotation.split("|")]
        if "None" in parts and len(parts) > 1:
            return " | ".join(p for p in parts if p != "None"), True
        if annotation.startswith("Optional[") and annotation.endswith("]"):
            return annotation[len("Optional["):-1], True
        return annotation, False
    if not _is_union(annotation):
        return annotation, False
    members = [arg for arg in get_args(annotation) if arg is not _NONE_TYPE]
    nullable = len(members) != len(get_args(annotation))
    if not nullable:
        return annotation, False
    if len(members) == 1:
        return members[0], True
    return Union[tuple(members)], True


def render_type(annotation: Any) -> str:
    """
    Render a type annotation as source text.

    Generic containers are rendered recursively (``list[Post]``,
    ``dict[str, int]``); forward references render as their target name.
    """
    annotation = strip_annotated(annotation)
    if annotation is None or annotation is _NONE_TYPE:
        return "None"
    if annotation is Any:
        return "Any"
    if isinstance(annotation, str):
        return annotation
    if isinstance(annotation, ForwardRef):
        return annotation.__forward_arg__
    if isinstance(annotation, typing.TypeVar):
        return annotation.__name__
    if _is_union(annotation):
        return " | ".join(render_type(arg) for arg in get_args(annotation))

    origin = get_origin(annotation)
    if origin is not None:
        args = get_args(annotation)
        origin_name = _type_name(origin)
        if not args:
            return origin_name
        if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
            return f"{origin_name}[{render_type(args[0])}, ...]"
        if origin is typing.Literal:
            return f"Literal[{', '.join(repr(arg) for arg in args)}]"
        return f"{origin_name}[{', '.join(render_type(arg) for arg in args)}]"

    return _type_name(annotation)


def _type_name(tp: Any) -> str:
    if tp is typing.Literal:
        return "Literal"
    name = getattr(tp, "__name__", None)
    if name is None:
        name = getattr(tp, "_name", None) or repr(tp)
    return name


def sequence_element(annotation: Any) -> Any | None:
    """
    Return the element type of a sequence annotation, or None.

    ``list[Post]`` -> ``Post``; ``Post`` -> None. Textual annotations such as
    ``"list[Post]"`` are handled too.
    """
    annotation, _ = split_optional(annotation)
    if isinstance(annotation, str):
        head, sep, rest = annotation.partition("[")
        if not sep or not rest.endswith("]"):
            return None
        if head.rsplit(".", 1)[-1] not in _SEQUENCE_NAMES:
            return None
        return rest[:-1].split(",")[0].strip()
    if get_origin(annotation) in SEQUENCE_ORIGINS:
        args = get_args(annotation)
        if args:
            return args[0]
    return None


_SEQUENCE_NAMES = {
    "list",
    "List",
    "tuple",
    "Tuple",
    "set",
    "Set",
    "frozenset",
    "FrozenSet",
    "Sequence",
    "MutableSequence",
    "AbstractSet",
    "MutableSet",
    "Iterable",
    "Collection",
}
