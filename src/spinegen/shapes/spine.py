"""
spinegen — spine model and conformance

File: src/spinegen/shapes/spine.py

Purpose
- Represent concrete values as shape-tagged trees that mirror signatures.
- Decide whether a spine conforms to a signature.

Functional requirements
- Composite payloads are thunks; leaves carry their scalar value directly.
- ``is_valid_spine`` recurses on the spine, which is always finite, so it
  terminates even for signatures that permit unbounded recursion.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final, TypeAlias

from spinegen.shapes.signature import (
    LeafKind,
    SigArray,
    SigLeaf,
    SigProd,
    SigRecord,
    Signature,
    Thunk,
    delay,
)


@dataclass(frozen=True, slots=True)
class SBoolean:
    value: bool


@dataclass(frozen=True, slots=True)
class SNumber:
    value: float


@dataclass(frozen=True, slots=True)
class SInt:
    value: int


@dataclass(frozen=True, slots=True)
class SString:
    value: str


@dataclass(frozen=True, slots=True)
class SChar:
    value: str


@dataclass(frozen=True, slots=True)
class SUnit:
    pass


@dataclass(frozen=True, slots=True, eq=False)
class SArray:
    elements: tuple[Thunk[Spine], ...]


@dataclass(frozen=True, slots=True, eq=False)
class SpineField:
    label: str
    value: Thunk[Spine]


@dataclass(frozen=True, slots=True, eq=False)
class SRecord:
    fields: tuple[SpineField, ...]

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(field.label for field in self.fields)


@dataclass(frozen=True, slots=True, eq=False)
class SProd:
    constructor: str
    fields: tuple[Thunk[Spine], ...]


LeafSpine: TypeAlias = SBoolean | SNumber | SInt | SString | SChar | SUnit
Spine: TypeAlias = LeafSpine | SArray | SRecord | SProd

S_UNIT: Final[SUnit] = SUnit()

LEAF_SPINE_TYPES: Final[dict[LeafKind, type[LeafSpine]]] = {
    LeafKind.BOOLEAN: SBoolean,
    LeafKind.NUMBER: SNumber,
    LeafKind.INTEGER: SInt,
    LeafKind.CHARACTER: SChar,
    LeafKind.STRING: SString,
    LeafKind.UNIT: SUnit,
}


def s_array(elements: list[Spine] | tuple[Spine, ...]) -> SArray:
    return SArray(tuple(delay(element) for element in elements))


def s_record(fields: list[tuple[str, Spine]] | tuple[tuple[str, Spine], ...]) -> SRecord:
    return SRecord(tuple(SpineField(label, delay(value)) for label, value in fields))


def s_prod(constructor: str, fields: list[Spine] | tuple[Spine, ...]) -> SProd:
    return SProd(constructor, tuple(delay(item) for item in fields))


def is_valid_spine(sig: Signature, spine: Spine) -> bool:
    """Return whether ``spine`` structurally conforms to ``sig``."""

    if isinstance(sig, SigLeaf):
        return type(spine) is LEAF_SPINE_TYPES[sig.kind]

    if isinstance(sig, SigArray):
        if not isinstance(spine, SArray):
            return False
        if not spine.elements:
            return True
        element_sig = sig.element()
        return all(is_valid_spine(element_sig, element()) for element in spine.elements)

    if isinstance(sig, SigRecord):
        if not isinstance(spine, SRecord) or len(sig.fields) != len(spine.fields):
            return False
        return all(
            sig_field.label == spine_field.label
            and is_valid_spine(sig_field.value(), spine_field.value())
            for sig_field, spine_field in zip(sig.fields, spine.fields)
        )

    if isinstance(sig, SigProd):
        if not isinstance(spine, SProd):
            return False
        # Constructor names need not be unique; any same-named candidate may match.
        return any(
            constructor.name == spine.constructor
            and constructor.arity == len(spine.fields)
            and all(
                is_valid_spine(field_sig(), field_spine())
                for field_sig, field_spine in zip(constructor.fields, spine.fields)
            )
            for constructor in sig.constructors
        )

    raise TypeError(f"not a signature: {type(sig).__name__}")


def spines_equal(left: Spine, right: Spine) -> bool:
    """Structural equality, forcing every thunk on both sides."""

    if isinstance(left, SArray):
        return (
            isinstance(right, SArray)
            and len(left.elements) == len(right.elements)
            and all(spines_equal(a(), b()) for a, b in zip(left.elements, right.elements))
        )
    if isinstance(left, SRecord):
        return (
            isinstance(right, SRecord)
            and left.labels == right.labels
            and all(spines_equal(a.value(), b.value()) for a, b in zip(left.fields, right.fields))
        )
    if isinstance(left, SProd):
        return (
            isinstance(right, SProd)
            and left.constructor == right.constructor
            and len(left.fields) == len(right.fields)
            and all(spines_equal(a(), b()) for a, b in zip(left.fields, right.fields))
        )
    return type(left) is type(right) and left == right


def spine_depth(spine: Spine) -> int:
    """Number of nested composite layers; leaves have depth 0."""

    if isinstance(spine, SArray):
        children = [element() for element in spine.elements]
    elif isinstance(spine, SRecord):
        children = [field.value() for field in spine.fields]
    elif isinstance(spine, SProd):
        children = [item() for item in spine.fields]
    else:
        return 0
    return 1 + max((spine_depth(child) for child in children), default=0)


__all__ = [
    "LEAF_SPINE_TYPES",
    "S_UNIT",
    "LeafSpine",
    "SArray",
    "SBoolean",
    "SChar",
    "SInt",
    "SNumber",
    "SProd",
    "SRecord",
    "SString",
    "SUnit",
    "Spine",
    "SpineField",
    "is_valid_spine",
    "s_array",
    "s_prod",
    "s_record",
    "spine_depth",
    "spines_equal",
]
