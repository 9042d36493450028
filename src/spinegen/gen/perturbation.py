"""Generator perturbations built from ordered variant tokens.

A ``Perturbation`` is a flat, ordered sequence of integer tokens. Composition
is concatenation, so it is associative and the identity is the empty
sequence. Applying a perturbation to a generator threads the incoming random
source through one BLAKE2b re-seeding step per token before the generator
runs; equal token sequences on equal random states always produce equal draws.
"""

from __future__ import annotations

import hashlib
import random
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, TypeVar

if TYPE_CHECKING:
    from spinegen.gen.core import Gen

T = TypeVar("T")

_SEED_BITS: Final[int] = 64
_DIGEST_BYTES: Final[int] = 16


@dataclass(frozen=True, slots=True)
class Perturbation:
    """Ordered variant tokens; the first token is applied first."""

    tokens: tuple[int, ...] = ()

    @classmethod
    def identity(cls) -> Perturbation:
        return _IDENTITY

    @classmethod
    def variant(cls, token: int) -> Perturbation:
        if isinstance(token, bool) or not isinstance(token, int):
            raise TypeError(f"variant token must be an int, got {type(token).__name__}")
        return cls((token,))

    @classmethod
    def concat(cls, parts: Iterable[Perturbation]) -> Perturbation:
        tokens: list[int] = []
        for part in parts:
            tokens.extend(part.tokens)
        return cls(tuple(tokens))

    def then(self, other: Perturbation) -> Perturbation:
        return Perturbation(self.tokens + other.tokens)

    def __add__(self, other: object) -> Perturbation:
        if not isinstance(other, Perturbation):
            return NotImplemented
        return self.then(other)

    def __len__(self) -> int:
        return len(self.tokens)

    def reseed(self, rng: random.Random) -> random.Random:
        """Return the random source a perturbed generator runs on."""

        current = rng
        for token in self.tokens:
            current = random.Random(_mix(current.getrandbits(_SEED_BITS), token))
        return current

    def apply(self, gen: Gen[T]) -> Gen[T]:
        return gen.perturb(self)


def _mix(bits: int, token: int) -> int:
    digest = hashlib.blake2b(f"{bits}:{token}".encode("ascii"), digest_size=_DIGEST_BYTES)
    return int.from_bytes(digest.digest(), "big")


_IDENTITY: Final[Perturbation] = Perturbation()

__all__ = ["Perturbation"]
