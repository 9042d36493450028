"""Classification of Python types into signature shapes."""

from __future__ import annotations

import dataclasses
import enum
import functools
import threading
import types
import typing
from typing import Any, Final, NewType

from spinegen.errors import ReflectionError

Char = NewType("Char", str)
"""A single character; reflected as the character leaf kind."""

NONE_CONSTRUCTOR: Final[str] = "None"

_SEALED_LOCK = threading.Lock()
_SEALED: set[type] = set()


def sealed(cls: type) -> type:
    """Mark ``cls`` as a sum type whose dataclass subclasses are its constructors."""

    if not isinstance(cls, type):
        raise TypeError("@sealed can only decorate classes")
    with _SEALED_LOCK:
        _SEALED.add(cls)
    return cls


def is_sealed(tp: object) -> bool:
    with _SEALED_LOCK:
        return isinstance(tp, type) and tp in _SEALED


def sealed_variants(cls: type) -> tuple[type, ...]:
    """Dataclass subclasses of a sealed base, ordered by class name."""

    variants = [sub for sub in cls.__subclasses__() if dataclasses.is_dataclass(sub)]
    return tuple(sorted(variants, key=lambda sub: sub.__name__))


def is_none_type(tp: object) -> bool:
    return tp is None or tp is type(None)


def is_union(tp: object) -> bool:
    return typing.get_origin(tp) in (typing.Union, types.UnionType)


def union_members(tp: object) -> tuple[Any, ...]:
    return typing.get_args(tp)


def is_enum_type(tp: object) -> bool:
    return isinstance(tp, type) and issubclass(tp, enum.Enum)


def is_plain_dataclass(tp: object) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def array_element(tp: object) -> tuple[type, Any] | None:
    """Return ``(container, element type)`` for ``list[T]`` and ``tuple[T, ...]``."""

    origin = typing.get_origin(tp)
    args = typing.get_args(tp)
    if origin is list and len(args) == 1:
        return list, args[0]
    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return tuple, args[0]
    return None


@functools.lru_cache(maxsize=None)
def init_field_hints(cls: type) -> tuple[tuple[str, Any], ...]:
    """Constructor fields of a dataclass in declaration order, with resolved hints."""

    hints = _resolve_hints(cls)
    return tuple(
        (field.name, hints[field.name]) for field in dataclasses.fields(cls) if field.init
    )


@functools.lru_cache(maxsize=None)
def typeddict_hints(tp: type) -> tuple[tuple[str, Any], ...]:
    return tuple(_resolve_hints(tp).items())


def _resolve_hints(tp: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(tp)
    except NameError as exc:
        raise ReflectionError(f"cannot resolve annotations of {tp.__name__}: {exc}") from exc


def type_label(tp: object) -> str:
    if isinstance(tp, type):
        return tp.__name__
    return repr(tp)


__all__ = [
    "NONE_CONSTRUCTOR",
    "Char",
    "array_element",
    "init_field_hints",
    "is_enum_type",
    "is_none_type",
    "is_plain_dataclass",
    "is_sealed",
    "is_union",
    "sealed",
    "sealed_variants",
    "type_label",
    "typeddict_hints",
    "union_members",
]
