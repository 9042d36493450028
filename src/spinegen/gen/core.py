"""
spinegen — size-parameterized random generators

File: src/spinegen/gen/core.py

Purpose
- Provide the generator abstraction the shape generators are written against:
  read the current size, override it for a sub-call, uniform and weighted
  choice, and bounded-length sequences.

Functional requirements
- A generator is a pure function of a ``Source`` (random state + size).
- Choices over an empty alternative set fail loudly with
  ``DegenerateSignatureError``; they never fall back to a default.
- Rejected draws raise ``DrawRejected`` and are retried by ``generate``.

Non-functional requirements
- Standard library ``random`` only; no global random state is touched.
"""

from __future__ import annotations

import math
import random
from collections.abc import Callable, Sequence
from typing import TYPE_CHECKING, Generic, TypeVar

import structlog

from spinegen.config.schema import GenerationSettings
from spinegen.errors import DegenerateSignatureError, DrawRejected, GenerationExhaustedError

if TYPE_CHECKING:
    from spinegen.gen.perturbation import Perturbation

T = TypeVar("T")
U = TypeVar("U")

_logger = structlog.get_logger(__name__)


class Source:
    """Random state and size for a single draw."""

    __slots__ = ("rng", "settings", "size")

    def __init__(
        self,
        rng: random.Random,
        size: int,
        settings: GenerationSettings | None = None,
    ) -> None:
        if isinstance(size, bool) or not isinstance(size, int):
            raise TypeError(f"size must be an int, got {type(size).__name__}")
        if size < 0:
            raise ValueError("size must be >= 0")
        self.rng = rng
        self.size = size
        self.settings = settings if settings is not None else GenerationSettings()

    def draw(self, gen: Gen[T]) -> T:
        return gen.run(self)

    def with_size(self, size: int) -> Source:
        return Source(self.rng, size, self.settings)

    def with_rng(self, rng: random.Random) -> Source:
        return Source(rng, self.size, self.settings)


class Gen(Generic[T]):
    """A random generator of ``T`` values."""

    __slots__ = ("_run", "label")

    def __init__(self, run: Callable[[Source], T], label: str = "gen") -> None:
        self._run = run
        self.label = label

    def __repr__(self) -> str:
        return f"Gen({self.label})"

    def run(self, source: Source) -> T:
        return self._run(source)

    def map(self, func: Callable[[T], U]) -> Gen[U]:
        return Gen(lambda source: func(self._run(source)), f"{self.label}.map")

    def bind(self, func: Callable[[T], Gen[U]]) -> Gen[U]:
        return Gen(lambda source: func(self._run(source)).run(source), f"{self.label}.bind")

    def filter_map(self, func: Callable[[T], U | None], reason: str = "filtered") -> Gen[U]:
        """Map through ``func``; a ``None`` result abandons the draw."""

        def run(source: Source) -> U:
            result = func(self._run(source))
            if result is None:
                raise DrawRejected(reason)
            return result

        return Gen(run, f"{self.label}.filter_map")

    def perturb(self, perturbation: Perturbation) -> Gen[T]:
        if not perturbation.tokens:
            return self
        return Gen(
            lambda source: self._run(source.with_rng(perturbation.reseed(source.rng))),
            f"{self.label}.perturb",
        )


def constant(value: T) -> Gen[T]:
    return Gen(lambda _source: value, "constant")


def delay(factory: Callable[[], Gen[T]]) -> Gen[T]:
    """Build the wrapped generator only when a draw needs it."""

    return Gen(lambda source: factory().run(source), "delay")


def sized(factory: Callable[[int], Gen[T]]) -> Gen[T]:
    return Gen(lambda source: factory(source.size).run(source), "sized")


def resize(size: int, gen: Gen[T]) -> Gen[T]:
    return Gen(lambda source: gen.run(source.with_size(size)), f"resize({size})")


def choose_int(low: int, high: int) -> Gen[int]:
    if low > high:
        raise ValueError(f"empty integer range [{low}, {high}]")
    return Gen(lambda source: source.rng.randint(low, high), f"choose_int({low},{high})")


def elements(options: Sequence[T]) -> Gen[T]:
    """Uniform choice among fixed values."""

    values = tuple(options)
    if not values:
        raise DegenerateSignatureError("elements() requires at least one option")
    return Gen(lambda source: values[source.rng.randrange(len(values))], "elements")


def one_of(gens: Sequence[Gen[T]]) -> Gen[T]:
    """Uniform choice among generators."""

    options = tuple(gens)
    if not options:
        raise DegenerateSignatureError("one_of() requires at least one generator")
    return Gen(
        lambda source: options[source.rng.randrange(len(options))].run(source), "one_of"
    )


def weighted_index(rng: random.Random, weights: Sequence[float]) -> int:
    """Pick an index with probability proportional to its weight."""

    if not weights:
        raise DegenerateSignatureError("weighted choice requires at least one alternative")
    total = 0.0
    for weight in weights:
        if not math.isfinite(weight) or weight < 0:
            raise DegenerateSignatureError(f"invalid choice weight {weight!r}")
        total += weight
    if total <= 0:
        raise DegenerateSignatureError("weighted choice requires a positive total weight")

    target = rng.random() * total
    cumulative = 0.0
    for index, weight in enumerate(weights):
        cumulative += weight
        if target < cumulative:
            return index
    # Float rounding can leave target == total; fall back to the last positive weight.
    return max(index for index, weight in enumerate(weights) if weight > 0)


def frequency(pairs: Sequence[tuple[float, Gen[T]]]) -> Gen[T]:
    """Weighted choice among generators."""

    options = tuple(pairs)
    if not options:
        raise DegenerateSignatureError("frequency() requires at least one generator")
    weights = tuple(float(weight) for weight, _ in options)

    def run(source: Source) -> T:
        return options[weighted_index(source.rng, weights)][1].run(source)

    return Gen(run, "frequency")


def list_of(gen: Gen[T]) -> Gen[list[T]]:
    """Lists whose length is uniform in ``[0, size]``."""

    def run(source: Source) -> list[T]:
        length = source.rng.randint(0, source.size)
        return [gen.run(source) for _ in range(length)]

    return Gen(run, f"list_of({gen.label})")


def non_empty_list_of(gen: Gen[T]) -> Gen[list[T]]:
    """Lists whose length is uniform in ``[1, max(1, size)]``."""

    def run(source: Source) -> list[T]:
        length = source.rng.randint(1, max(1, source.size))
        return [gen.run(source) for _ in range(length)]

    return Gen(run, f"non_empty_list_of({gen.label})")


def generate(
    gen: Gen[T],
    *,
    seed: int | None = None,
    size: int | None = None,
    settings: GenerationSettings | None = None,
    rng: random.Random | None = None,
) -> T:
    """Draw one value, retrying rejected draws up to ``max_rejected_draws``."""

    resolved = settings if settings is not None else GenerationSettings()
    if rng is None:
        rng = random.Random(seed if seed is not None else resolved.seed)
    resolved_size = resolved.default_size if size is None else size

    last_reason: str | None = None
    for attempt in range(1, resolved.max_rejected_draws + 1):
        source = Source(rng, resolved_size, resolved)
        try:
            return gen.run(source)
        except DrawRejected as exc:
            last_reason = exc.reason
            _logger.debug("draw_rejected", generator=gen.label, attempt=attempt, reason=exc.reason)

    _logger.warning(
        "generation_exhausted",
        generator=gen.label,
        attempts=resolved.max_rejected_draws,
        reason=last_reason,
    )
    raise GenerationExhaustedError(resolved.max_rejected_draws, last_reason)


def sample(
    gen: Gen[T],
    count: int,
    *,
    seed: int | None = None,
    size: int | None = None,
    settings: GenerationSettings | None = None,
) -> list[T]:
    """Draw ``count`` values from one random stream."""

    if count < 0:
        raise ValueError("count must be >= 0")
    resolved = settings if settings is not None else GenerationSettings()
    rng = random.Random(seed if seed is not None else resolved.seed)
    return [generate(gen, size=size, settings=resolved, rng=rng) for _ in range(count)]


__all__ = [
    "Gen",
    "Source",
    "choose_int",
    "constant",
    "delay",
    "elements",
    "frequency",
    "generate",
    "list_of",
    "non_empty_list_of",
    "one_of",
    "resize",
    "sample",
    "sized",
    "weighted_index",
]
