"""
spinegen — random spine generation

File: src/spinegen/generic/spines.py

Purpose
- Produce a random spine that conforms to a given signature.

Functional requirements
- A ``trail`` of constructor names chosen on the current path is threaded down
  the recursion as an immutable tuple. Array elements and record fields share
  their parent's trail; only product fields extend it.
- Each constructor is weighted ``6 / (5 + n)`` where ``n`` counts its name in
  the trail. Weights shrink with every repetition but never reach zero.
- A product with no constructors is a caller error.
- A trail deeper than ``settings.max_trail_depth`` raises ``SpineDivergedError``.
- So does a single draw that passes ``settings.max_spine_nodes`` nodes. A type
  whose only constructor recurses through a list gets no damping from the
  weighting, since there is no alternative constructor to prefer; with list
  lengths uniform in ``[0, size]`` it usually grows until one of these limits.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence

import structlog

from spinegen.constants import TRAIL_WEIGHT_NUMERATOR, TRAIL_WEIGHT_OFFSET
from spinegen.errors import DegenerateSignatureError, SpineDivergedError
from spinegen.gen.core import Gen, Source, weighted_index
from spinegen.gen.leaves import (
    arbitrary_bool,
    arbitrary_char,
    arbitrary_int,
    arbitrary_number,
    arbitrary_string,
)
from spinegen.shapes.signature import (
    Constructor,
    LeafKind,
    SigArray,
    SigLeaf,
    SigProd,
    SigRecord,
    Signature,
    delay,
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
    Spine,
    SpineField,
)

Trail = tuple[str, ...]

_logger = structlog.get_logger(__name__)


def constructor_weight(trail_count: int) -> float:
    """Selection weight of a constructor already used ``trail_count`` times on the path."""

    if trail_count < 0:
        raise ValueError("trail_count must be >= 0")
    return TRAIL_WEIGHT_NUMERATOR / (TRAIL_WEIGHT_OFFSET + trail_count)


def constructor_weights(constructors: Sequence[Constructor], trail: Trail) -> tuple[float, ...]:
    counts = Counter(trail)
    return tuple(constructor_weight(counts[constructor.name]) for constructor in constructors)


def gen_spine(sig: Signature) -> Gen[Spine]:
    """Random spines conforming to ``sig``."""

    return Gen(lambda source: draw_spine(source, sig), "spine")


class _NodeCount:
    __slots__ = ("value",)

    def __init__(self) -> None:
        self.value = 0


def draw_spine(source: Source, sig: Signature, trail: Trail = ()) -> Spine:
    """Draw one spine; the node limit applies to this call as a whole."""

    return _draw(source, sig, trail, _NodeCount())


def _draw(source: Source, sig: Signature, trail: Trail, nodes: _NodeCount) -> Spine:
    nodes.value += 1

    if isinstance(sig, SigLeaf):
        return _draw_leaf(source, sig.kind)

    if isinstance(sig, SigArray):
        element_sig = sig.element()
        length = source.rng.randint(0, source.size)
        return SArray(
            tuple([delay(_draw(source, element_sig, trail, nodes)) for _ in range(length)])
        )

    if isinstance(sig, SigRecord):
        return SRecord(
            tuple(
                [
                    SpineField(field.label, delay(_draw(source, field.value(), trail, nodes)))
                    for field in sig.fields
                ]
            )
        )

    if isinstance(sig, SigProd):
        return _draw_product(source, sig, trail, nodes)

    raise TypeError(f"not a signature: {type(sig).__name__}")


def _draw_product(source: Source, sig: SigProd, trail: Trail, nodes: _NodeCount) -> Spine:
    if not sig.constructors:
        raise DegenerateSignatureError(f"product {sig.type_name!r} has no constructors")

    node_limit = source.settings.max_spine_nodes
    if nodes.value > node_limit:
        _logger.error(
            "spine_generation_diverged", type_name=sig.type_name, depth=len(trail), nodes=node_limit
        )
        raise SpineDivergedError(sig.type_name, len(trail), nodes=node_limit)

    limit = source.settings.max_trail_depth
    if len(trail) >= limit:
        _logger.error("spine_generation_diverged", type_name=sig.type_name, depth=limit)
        raise SpineDivergedError(sig.type_name, limit)

    weights = constructor_weights(sig.constructors, trail)
    chosen = sig.constructors[weighted_index(source.rng, weights)]
    child_trail = (*trail, chosen.name)
    return SProd(
        chosen.name,
        tuple([delay(_draw(source, field(), child_trail, nodes)) for field in chosen.fields]),
    )


def _draw_leaf(source: Source, kind: LeafKind) -> Spine:
    if kind is LeafKind.BOOLEAN:
        return SBoolean(source.draw(arbitrary_bool))
    if kind is LeafKind.NUMBER:
        return SNumber(source.draw(arbitrary_number))
    if kind is LeafKind.INTEGER:
        return SInt(source.draw(arbitrary_int))
    if kind is LeafKind.CHARACTER:
        return SChar(source.draw(arbitrary_char))
    if kind is LeafKind.STRING:
        return SString(source.draw(arbitrary_string))
    return S_UNIT


__all__ = ["Trail", "constructor_weight", "constructor_weights", "draw_spine", "gen_spine"]
