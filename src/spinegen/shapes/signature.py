"""
spinegen — signature model

File: src/spinegen/shapes/signature.py

Purpose
- Describe data shapes: scalar leaves, arrays, labelled records, and sums of
  products.

Functional requirements
- Nested signatures are held behind zero-argument thunks so a product can refer
  back to itself without eager infinite expansion.
- Record labels are not required to be unique by the model.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Final, TypeAlias, TypeVar

T = TypeVar("T")

Thunk: TypeAlias = Callable[[], T]


def delay(value: T) -> Thunk[T]:
    """Wrap an already-built value in a thunk."""

    return lambda: value


class LeafKind(StrEnum):
    BOOLEAN = "boolean"
    NUMBER = "number"
    INTEGER = "integer"
    CHARACTER = "character"
    STRING = "string"
    UNIT = "unit"


@dataclass(frozen=True, slots=True)
class SigLeaf:
    kind: LeafKind


@dataclass(frozen=True, slots=True, eq=False)
class SigArray:
    element: Thunk[Signature]


@dataclass(frozen=True, slots=True, eq=False)
class RecordField:
    label: str
    value: Thunk[Signature]


@dataclass(frozen=True, slots=True, eq=False)
class SigRecord:
    fields: tuple[RecordField, ...]

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(field.label for field in self.fields)


@dataclass(frozen=True, slots=True, eq=False)
class Constructor:
    name: str
    fields: tuple[Thunk[Signature], ...]

    @property
    def arity(self) -> int:
        return len(self.fields)


@dataclass(frozen=True, slots=True, eq=False)
class SigProd:
    type_name: str
    constructors: tuple[Constructor, ...]

    def constructor(self, name: str) -> Constructor | None:
        """First constructor called ``name``; names are not required to be unique."""

        for candidate in self.constructors:
            if candidate.name == name:
                return candidate
        return None

    @property
    def constructor_names(self) -> tuple[str, ...]:
        return tuple(constructor.name for constructor in self.constructors)


Signature: TypeAlias = SigLeaf | SigArray | SigRecord | SigProd

SIG_BOOLEAN: Final[SigLeaf] = SigLeaf(LeafKind.BOOLEAN)
SIG_NUMBER: Final[SigLeaf] = SigLeaf(LeafKind.NUMBER)
SIG_INT: Final[SigLeaf] = SigLeaf(LeafKind.INTEGER)
SIG_CHAR: Final[SigLeaf] = SigLeaf(LeafKind.CHARACTER)
SIG_STRING: Final[SigLeaf] = SigLeaf(LeafKind.STRING)
SIG_UNIT: Final[SigLeaf] = SigLeaf(LeafKind.UNIT)


def sig_array(element: Signature | Thunk[Signature]) -> SigArray:
    return SigArray(_as_thunk(element))


def sig_record(fields: Sequence[tuple[str, Signature | Thunk[Signature]]]) -> SigRecord:
    return SigRecord(tuple(RecordField(label, _as_thunk(value)) for label, value in fields))


def sig_prod(
    type_name: str,
    constructors: Sequence[tuple[str, Sequence[Signature | Thunk[Signature]]]],
) -> SigProd:
    return SigProd(
        type_name,
        tuple(
            Constructor(name, tuple(_as_thunk(item) for item in fields))
            for name, fields in constructors
        ),
    )


def describe_signature(sig: Signature, *, max_depth: int = 4) -> str:
    """Human-readable rendering; recursion past ``max_depth`` is elided."""

    if max_depth < 0:
        return "..."
    if isinstance(sig, SigLeaf):
        return sig.kind.value
    if isinstance(sig, SigArray):
        return f"[{describe_signature(sig.element(), max_depth=max_depth - 1)}]"
    if isinstance(sig, SigRecord):
        inner = ", ".join(
            f"{field.label!r}: {describe_signature(field.value(), max_depth=max_depth - 1)}"
            for field in sig.fields
        )
        return "{" + inner + "}"
    alternatives = " | ".join(
        " ".join(
            [constructor.name]
            + [f"({describe_signature(item(), max_depth=max_depth - 1)})" for item in constructor.fields]
        )
        for constructor in sig.constructors
    )
    return f"{sig.type_name} = {alternatives}" if alternatives else f"{sig.type_name} = <empty>"


def _as_thunk(value: Signature | Thunk[Signature]) -> Thunk[Signature]:
    if isinstance(value, (SigLeaf, SigArray, SigRecord, SigProd)):
        return delay(value)
    if callable(value):
        return value
    raise TypeError(f"expected a signature or a thunk, got {type(value).__name__}")


__all__ = [
    "SIG_BOOLEAN",
    "SIG_CHAR",
    "SIG_INT",
    "SIG_NUMBER",
    "SIG_STRING",
    "SIG_UNIT",
    "Constructor",
    "LeafKind",
    "RecordField",
    "SigArray",
    "SigLeaf",
    "SigProd",
    "SigRecord",
    "Signature",
    "Thunk",
    "delay",
    "describe_signature",
    "sig_array",
    "sig_prod",
    "sig_record",
]
