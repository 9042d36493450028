"""Type to signature reflection.

Supported shapes:

- ``bool``, ``int``, ``float``, ``str``, ``Char`` and ``None`` become leaves.
- ``list[T]`` and ``tuple[T, ...]`` become arrays.
- ``TypedDict`` classes become records in declaration order.
- ``Enum`` classes become products of nullary constructors in definition order.
- Dataclasses become single-constructor products; ``@sealed`` bases become
  products over their dataclass subclasses, sorted by class name.
- Unions of dataclasses and ``None`` become products in declared order.

Nested signatures are thunks that call back into ``signature_of``, so
self-referential dataclasses reflect without infinite expansion.
"""

from __future__ import annotations

import functools
import typing
from typing import Any

from spinegen.errors import ReflectionError
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
from spinegen.shapes.signature import (
    SIG_BOOLEAN,
    SIG_CHAR,
    SIG_INT,
    SIG_NUMBER,
    SIG_STRING,
    SIG_UNIT,
    Constructor,
    RecordField,
    SigArray,
    SigProd,
    SigRecord,
    Signature,
)

_LEAF_SIGNATURES: dict[object, Signature] = {
    bool: SIG_BOOLEAN,
    int: SIG_INT,
    float: SIG_NUMBER,
    str: SIG_STRING,
    Char: SIG_CHAR,
}


@functools.lru_cache(maxsize=None)
def signature_of(tp: Any) -> Signature:
    """Return the signature describing values of ``tp``."""

    leaf = _LEAF_SIGNATURES.get(tp)
    if leaf is not None:
        return leaf
    if is_none_type(tp):
        return SIG_UNIT

    array = array_element(tp)
    if array is not None:
        return SigArray(functools.partial(signature_of, array[1]))

    if is_union(tp):
        return _union_signature(tp)
    if typing.is_typeddict(tp):
        return SigRecord(
            tuple(
                RecordField(label, functools.partial(signature_of, hint))
                for label, hint in typeddict_hints(tp)
            )
        )
    if is_enum_type(tp):
        return SigProd(tp.__name__, tuple(Constructor(member.name, ()) for member in tp))
    if is_sealed(tp):
        variants = sealed_variants(tp)
        if not variants:
            raise ReflectionError(f"sealed type {tp.__name__} has no dataclass variants")
        return SigProd(tp.__name__, tuple(_dataclass_constructor(variant) for variant in variants))
    if is_plain_dataclass(tp):
        return SigProd(tp.__name__, (_dataclass_constructor(tp),))

    raise ReflectionError(f"no signature for type {type_label(tp)}")


def _union_signature(tp: Any) -> SigProd:
    constructors: list[Constructor] = []
    for member in union_members(tp):
        if is_none_type(member):
            constructors.append(Constructor(NONE_CONSTRUCTOR, ()))
        elif is_plain_dataclass(member) and not is_sealed(member):
            constructors.append(_dataclass_constructor(member))
        else:
            raise ReflectionError(
                f"union member {type_label(member)} must be a dataclass or None"
            )
    names = [constructor.name for constructor in constructors]
    if len(set(names)) != len(names):
        raise ReflectionError(f"union {tp!r} has constructors with clashing names")
    return SigProd(" | ".join(names), tuple(constructors))


def _dataclass_constructor(cls: type) -> Constructor:
    return Constructor(
        cls.__name__,
        tuple(functools.partial(signature_of, hint) for _, hint in init_field_hints(cls)),
    )


__all__ = ["signature_of"]
