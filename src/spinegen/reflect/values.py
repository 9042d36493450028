"""Value to spine reduction and spine to value reification."""

from __future__ import annotations

import dataclasses
import enum
import functools
import typing
from collections.abc import Mapping
from typing import Any

from spinegen.errors import ReflectionError, ReificationError
from spinegen.reflect.introspection import (
    NONE_CONSTRUCTOR,
    Char,
    array_element,
    init_field_hints,
    is_enum_type,
    is_none_type,
    is_plain_dataclass,
    is_sealed,
    is_union,
    sealed_variants,
    type_label,
    typeddict_hints,
    union_members,
)
from spinegen.shapes.spine import (
    S_UNIT,
    SArray,
    SBoolean,
    SChar,
    SInt,
    SNumber,
    SProd,
    SRecord,
    SString,
    SUnit,
    Spine,
    SpineField,
)


def spine_of(value: object, tp: Any = None) -> Spine:
    """Reduce ``value`` to its spine, guided by ``tp`` when given.

    Without a type the runtime type of ``value`` is used; list and tuple
    elements are then reduced by their own runtime types.
    """

    if tp is None:
        return _infer_spine(value)
    if tp is bool:
        return SBoolean(_expect_instance(value, bool, tp))
    if tp is int:
        if isinstance(value, bool):
            raise ReflectionError(f"expected int, got bool {value!r}")
        return SInt(_expect_instance(value, int, tp))
    if tp is float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ReflectionError(f"expected float, got {type(value).__name__}")
        return SNumber(float(value))
    if tp is str:
        return SString(_expect_instance(value, str, tp))
    if tp is Char:
        char = _expect_instance(value, str, tp)
        if len(char) != 1:
            raise ReflectionError(f"expected a single character, got {char!r}")
        return SChar(char)
    if is_none_type(tp):
        if value is not None:
            raise ReflectionError(f"expected None, got {type(value).__name__}")
        return S_UNIT

    array = array_element(tp)
    if array is not None:
        container, element_tp = array
        items = _expect_instance(value, container, tp)
        return SArray(tuple(functools.partial(spine_of, item, element_tp) for item in items))
    if tp is list or tp is tuple:
        items = _expect_instance(value, tp, tp)
        return SArray(tuple(functools.partial(spine_of, item) for item in items))

    if is_union(tp):
        return _union_spine(value, tp)
    if typing.is_typeddict(tp):
        mapping = _expect_instance(value, Mapping, tp)
        fields: list[SpineField] = []
        for label, hint in typeddict_hints(tp):
            if label not in mapping:
                raise ReflectionError(f"{type_label(tp)} value is missing key {label!r}")
            fields.append(SpineField(label, functools.partial(spine_of, mapping[label], hint)))
        return SRecord(tuple(fields))
    if is_enum_type(tp):
        member = _expect_instance(value, tp, tp)
        return SProd(member.name, ())
    if is_sealed(tp):
        variant = type(value)
        if variant not in sealed_variants(tp):
            raise ReflectionError(f"{type(value).__name__} is not a variant of {tp.__name__}")
        return _dataclass_spine(value)
    if is_plain_dataclass(tp):
        _expect_instance(value, tp, tp)
        return _dataclass_spine(value)

    raise ReflectionError(f"no spine for type {type_label(tp)}")


def _infer_spine(value: object) -> Spine:
    if value is None:
        return S_UNIT
    if isinstance(value, (list, tuple)):
        return SArray(tuple(functools.partial(spine_of, item) for item in value))
    if isinstance(value, enum.Enum):
        return SProd(value.name, ())
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _dataclass_spine(value)
    return spine_of(value, type(value))


def _union_spine(value: object, tp: Any) -> Spine:
    for member in union_members(tp):
        if is_none_type(member):
            if value is None:
                return SProd(NONE_CONSTRUCTOR, ())
        elif type(value) is member:
            return _dataclass_spine(value)
    raise ReflectionError(f"{type(value).__name__} is not a member of {tp!r}")


def _dataclass_spine(value: Any) -> Spine:
    cls = type(value)
    return SProd(
        cls.__name__,
        tuple(
            functools.partial(spine_of, getattr(value, name), hint)
            for name, hint in init_field_hints(cls)
        ),
    )


def reify(tp: Any, spine: Spine) -> Any:
    """Rebuild a value of ``tp`` from ``spine``; raise ``ReificationError`` on mismatch."""

    if tp is bool:
        return _expect_spine(spine, SBoolean, tp).value
    if tp is int:
        return _expect_spine(spine, SInt, tp).value
    if tp is float:
        return _expect_spine(spine, SNumber, tp).value
    if tp is str:
        return _expect_spine(spine, SString, tp).value
    if tp is Char:
        return Char(_expect_spine(spine, SChar, tp).value)
    if is_none_type(tp):
        _expect_spine(spine, SUnit, tp)
        return None

    array = array_element(tp)
    if array is not None:
        container, element_tp = array
        elements = _expect_spine(spine, SArray, tp).elements
        return container(reify(element_tp, element()) for element in elements)

    if is_union(tp):
        prod = _expect_spine(spine, SProd, tp)
        for member in union_members(tp):
            if is_none_type(member):
                if prod.constructor == NONE_CONSTRUCTOR and not prod.fields:
                    return None
            elif member.__name__ == prod.constructor:
                return _reify_dataclass(member, prod)
        raise ReificationError(f"{prod.constructor!r} is not a constructor of {tp!r}")

    if typing.is_typeddict(tp):
        record = _expect_spine(spine, SRecord, tp)
        hints = typeddict_hints(tp)
        if record.labels != tuple(label for label, _ in hints):
            raise ReificationError(
                f"record labels {list(record.labels)} do not match {type_label(tp)}"
            )
        return {
            label: reify(hint, field.value()) for (label, hint), field in zip(hints, record.fields)
        }

    if is_enum_type(tp):
        prod = _expect_spine(spine, SProd, tp)
        if prod.fields or prod.constructor not in tp.__members__:
            raise ReificationError(f"{prod.constructor!r} is not a member of {tp.__name__}")
        return tp[prod.constructor]

    if is_sealed(tp):
        prod = _expect_spine(spine, SProd, tp)
        for variant in sealed_variants(tp):
            if variant.__name__ == prod.constructor:
                return _reify_dataclass(variant, prod)
        raise ReificationError(f"{prod.constructor!r} is not a variant of {tp.__name__}")

    if is_plain_dataclass(tp):
        prod = _expect_spine(spine, SProd, tp)
        if prod.constructor != tp.__name__:
            raise ReificationError(f"{prod.constructor!r} is not a constructor of {tp.__name__}")
        return _reify_dataclass(tp, prod)

    raise ReificationError(f"cannot reify type {type_label(tp)}")


def _reify_dataclass(cls: type, prod: SProd) -> Any:
    hints = init_field_hints(cls)
    if len(hints) != len(prod.fields):
        raise ReificationError(
            f"{cls.__name__} takes {len(hints)} field(s), spine has {len(prod.fields)}"
        )
    kwargs = {name: reify(hint, field()) for (name, hint), field in zip(hints, prod.fields)}
    return cls(**kwargs)


def _expect_instance(value: Any, expected: Any, tp: Any) -> Any:
    if not isinstance(value, expected):
        raise ReflectionError(f"expected {type_label(tp)}, got {type(value).__name__}")
    return value


def _expect_spine(spine: Spine, expected: type, tp: Any) -> Any:
    if not isinstance(spine, expected):
        raise ReificationError(f"cannot reify {type(spine).__name__} as {type_label(tp)}")
    return spine


__all__ = ["reify", "spine_of"]
