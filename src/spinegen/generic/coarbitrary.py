"""
spinegen — spine perturbation folder

File: src/spinegen/generic/coarbitrary.py

Purpose
- Fold a spine into a deterministic perturbation of a downstream generator.

Traversal order
- Leaves: the primitive perturbation of the scalar.
- Unit: identity.
- Array: element perturbations in element order.
- Record: for each field in stored order, the label (as a string) then the value.
- Product: the constructor name, then each field in stored order.

Every leaf and label contributes exactly once, in this order, so structurally
equal spines produce identical token sequences.
"""

from __future__ import annotations

from typing import Any, TypeVar

from spinegen.gen.core import Gen
from spinegen.gen.leaves import (
    coarbitrary_bool,
    coarbitrary_char,
    coarbitrary_int,
    coarbitrary_number,
    coarbitrary_string,
)
from spinegen.gen.perturbation import Perturbation
from spinegen.reflect.values import spine_of
from spinegen.shapes.spine import (
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
)

R = TypeVar("R")


def coarbitrary_spine(spine: Spine) -> Perturbation:
    """Return the perturbation for ``spine``."""

    tokens: list[int] = []
    _fold(spine, tokens)
    return Perturbation(tuple(tokens))


def _fold(spine: Spine, tokens: list[int]) -> None:
    if isinstance(spine, SArray):
        for element in spine.elements:
            _fold(element(), tokens)
    elif isinstance(spine, SRecord):
        for field in spine.fields:
            tokens.extend(coarbitrary_string(field.label).tokens)
            _fold(field.value(), tokens)
    elif isinstance(spine, SProd):
        tokens.extend(coarbitrary_string(spine.constructor).tokens)
        for item in spine.fields:
            _fold(item(), tokens)
    elif isinstance(spine, SUnit):
        return
    else:
        tokens.extend(_leaf_perturbation(spine).tokens)


def _leaf_perturbation(spine: Spine) -> Perturbation:
    if isinstance(spine, SBoolean):
        return coarbitrary_bool(spine.value)
    if isinstance(spine, SNumber):
        return coarbitrary_number(spine.value)
    if isinstance(spine, SInt):
        return coarbitrary_int(spine.value)
    if isinstance(spine, SChar):
        return coarbitrary_char(spine.value)
    if isinstance(spine, SString):
        return coarbitrary_string(spine.value)
    raise TypeError(f"not a spine: {type(spine).__name__}")


def g_coarbitrary(value: object, gen: Gen[R], tp: Any = None) -> Gen[R]:
    """Perturb ``gen`` by the shape of ``value``."""

    return gen.perturb(coarbitrary_spine(spine_of(value, tp)))


__all__ = ["coarbitrary_spine", "g_coarbitrary"]
