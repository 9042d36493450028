"""Primitive arbitrary/coarbitrary support for scalar leaf kinds."""

from __future__ import annotations

import string
import struct
from typing import Final

from spinegen.gen.core import Gen, Source, list_of
from spinegen.gen.perturbation import Perturbation

_CHAR_POOL: Final[str] = string.ascii_letters + string.digits + string.punctuation + " \t\n" + "éßλЖ中"


def _bool(source: Source) -> bool:
    return source.rng.random() < 0.5


def _number(source: Source) -> float:
    return source.rng.uniform(-float(source.size), float(source.size))


def _int(source: Source) -> int:
    return source.rng.randint(-source.size, source.size)


def _char(source: Source) -> str:
    return _CHAR_POOL[source.rng.randrange(len(_CHAR_POOL))]


arbitrary_bool: Final[Gen[bool]] = Gen(_bool, "bool")
arbitrary_number: Final[Gen[float]] = Gen(_number, "number")
arbitrary_int: Final[Gen[int]] = Gen(_int, "int")
arbitrary_char: Final[Gen[str]] = Gen(_char, "char")
arbitrary_string: Final[Gen[str]] = list_of(arbitrary_char).map("".join)


def coarbitrary_bool(value: bool) -> Perturbation:
    return Perturbation.variant(1 if value else 0)


def coarbitrary_int(value: int) -> Perturbation:
    return Perturbation.variant(int(value))


def coarbitrary_number(value: float) -> Perturbation:
    # IEEE-754 bit pattern, so 0.0 and -0.0 perturb differently.
    (bits,) = struct.unpack(">q", struct.pack(">d", float(value)))
    return Perturbation.variant(bits)


def coarbitrary_char(value: str) -> Perturbation:
    if len(value) != 1:
        raise ValueError(f"expected a single character, got {value!r}")
    return Perturbation.variant(ord(value))


def coarbitrary_string(value: str) -> Perturbation:
    """Length first, then each code point in order."""

    return Perturbation((len(value), *(ord(char) for char in value)))


__all__ = [
    "arbitrary_bool",
    "arbitrary_char",
    "arbitrary_int",
    "arbitrary_number",
    "arbitrary_string",
    "coarbitrary_bool",
    "coarbitrary_char",
    "coarbitrary_int",
    "coarbitrary_number",
    "coarbitrary_string",
]
