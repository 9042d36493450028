"""
spinegen — generic value production

File: src/spinegen/generic/arbitrary.py

Purpose
- Drive the signature and spine generators to produce validated pairs.
- Produce values of reflected Python types.

Functional requirements
- A pair that fails validation abandons the draw (``DrawRejected``); the runner
  decides whether to retry.
- Failing to reify a spine generated from the type's own signature is an
  internal invariant breach and raises ``InvariantViolationError``.
"""

from __future__ import annotations

from typing import Any, TypeVar

import structlog

from spinegen.errors import InvariantViolationError, ReificationError
from spinegen.gen.core import Gen, Source
from spinegen.generic.signatures import gen_signature
from spinegen.generic.spines import draw_spine
from spinegen.reflect.introspection import type_label
from spinegen.reflect.signatures import signature_of
from spinegen.reflect.values import reify
from spinegen.shapes.pair import ValidatedPair, make_validated_pair
from spinegen.shapes.serialization import spine_to_data

T = TypeVar("T")

_logger = structlog.get_logger(__name__)


def random_validated_pair() -> Gen[ValidatedPair]:
    """Random signature (budget = ambient size) with a conforming random spine."""

    def run(source: Source) -> ValidatedPair | None:
        signature = source.draw(gen_signature(source.size))
        spine = draw_spine(source, signature)
        pair = make_validated_pair(signature, spine)
        if pair is None:
            _logger.warning("validated_pair_rejected", size=source.size)
        return pair

    return Gen(run, "validated_pair").filter_map(lambda pair: pair, "spine does not conform")


def g_arbitrary(tp: type[T] | Any) -> Gen[T]:
    """Random values of ``tp`` via its reflected signature.

    Types whose only constructor recurses through a list (a rose tree) are not
    damped by the constructor weighting; draw them at a small size or expect
    ``SpineDivergedError``.
    """

    signature = signature_of(tp)

    def run(source: Source) -> T:
        spine = draw_spine(source, signature)
        try:
            return reify(tp, spine)
        except ReificationError as exc:
            _logger.error(
                "reification_invariant_violated",
                type=type_label(tp),
                spine=spine_to_data(spine),
                error=str(exc),
            )
            raise InvariantViolationError(
                f"generated spine for {type_label(tp)} could not be reified: {exc}"
            ) from exc

    return Gen(run, f"arbitrary({type_label(tp)})")


__all__ = ["g_arbitrary", "random_validated_pair"]
