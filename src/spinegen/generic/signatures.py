"""
spinegen — random signature generation

File: src/spinegen/generic/signatures.py

Purpose
- Produce random signatures bounded by a depth budget.

Functional requirements
- Budgets are clamped to ``MAX_SIGNATURE_BUDGET``.
- Budget 0 yields one of number/integer/string, chosen uniformly.
- Budget > 0 yields an array, record or product, chosen uniformly, whose
  children are generated with budget - 1.
- Record labels and constructor names are deduplicated, generated
  independently of their values, and zipped positionally; the longer side is
  truncated.
- Sequence lengths inside a signature are bounded by the clamped budget, so
  the fan-out shrinks with depth.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

from spinegen.constants import MAX_SIGNATURE_BUDGET
from spinegen.gen.core import Gen, Source, elements, list_of, non_empty_list_of, one_of
from spinegen.gen.leaves import arbitrary_string
from spinegen.shapes.signature import (
    SIG_INT,
    SIG_NUMBER,
    SIG_STRING,
    Constructor,
    RecordField,
    SigArray,
    SigProd,
    SigRecord,
    Signature,
    delay,
)

_BUDGET_ZERO_LEAVES: Final[tuple[Signature, ...]] = (SIG_NUMBER, SIG_INT, SIG_STRING)


def clamp_budget(budget: int) -> int:
    if isinstance(budget, bool) or not isinstance(budget, int):
        raise TypeError(f"budget must be an int, got {type(budget).__name__}")
    if budget < 0:
        raise ValueError("budget must be >= 0")
    return min(budget, MAX_SIGNATURE_BUDGET)


def dedupe(items: Sequence[str]) -> list[str]:
    """Drop repeated strings, keeping first occurrences in order."""

    return list(dict.fromkeys(items))


def gen_signature(budget: int) -> Gen[Signature]:
    """Random signatures of depth at most ``min(budget, 5)``."""

    clamped = clamp_budget(budget)
    if clamped == 0:
        return elements(_BUDGET_ZERO_LEAVES)

    child = gen_signature(clamped - 1)
    return one_of(
        (
            _bounded(clamped, _array_signature(child)),
            _bounded(clamped, _record_signature(child)),
            _bounded(clamped, _product_signature(child)),
        )
    )


def _bounded(budget: int, gen: Gen[Signature]) -> Gen[Signature]:
    return Gen(lambda source: gen.run(source.with_size(budget)), gen.label)


def _array_signature(child: Gen[Signature]) -> Gen[Signature]:
    def run(source: Source) -> Signature:
        return SigArray(delay(source.draw(child)))

    return Gen(run, "array_signature")


def _record_signature(child: Gen[Signature]) -> Gen[Signature]:
    labels_gen = list_of(arbitrary_string).map(dedupe)
    values_gen = list_of(child)

    def run(source: Source) -> Signature:
        labels = source.draw(labels_gen)
        values = source.draw(values_gen)
        return SigRecord(
            tuple(RecordField(label, delay(value)) for label, value in zip(labels, values))
        )

    return Gen(run, "record_signature")


def _product_signature(child: Gen[Signature]) -> Gen[Signature]:
    names_gen = non_empty_list_of(arbitrary_string).map(dedupe)
    field_lists_gen = non_empty_list_of(list_of(child))

    def run(source: Source) -> Signature:
        type_name = source.draw(arbitrary_string)
        names = source.draw(names_gen)
        field_lists = source.draw(field_lists_gen)
        return SigProd(
            type_name,
            tuple(
                Constructor(name, tuple(delay(item) for item in fields))
                for name, fields in zip(names, field_lists)
            ),
        )

    return Gen(run, "product_signature")


__all__ = ["clamp_budget", "dedupe", "gen_signature"]
