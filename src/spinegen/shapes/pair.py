"""Signature/spine pairs that are known to conform."""

from __future__ import annotations

from typing import Final

from spinegen.shapes.signature import Signature
from spinegen.shapes.spine import Spine, is_valid_spine

_CONSTRUCTION_TOKEN: Final[object] = object()


class ValidatedPair:
    """A signature together with a spine that conforms to it.

    Instances only come from ``make_validated_pair``.
    """

    __slots__ = ("_signature", "_spine")

    def __init__(self, signature: Signature, spine: Spine, *, _token: object = None) -> None:
        if _token is not _CONSTRUCTION_TOKEN:
            raise TypeError("ValidatedPair must be created with make_validated_pair()")
        object.__setattr__(self, "_signature", signature)
        object.__setattr__(self, "_spine", spine)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"ValidatedPair is immutable; cannot set {name!r}")

    def __repr__(self) -> str:
        return f"ValidatedPair(signature={self._signature!r}, spine={self._spine!r})"

    @property
    def signature(self) -> Signature:
        return self._signature

    @property
    def spine(self) -> Spine:
        return self._spine


def make_validated_pair(signature: Signature, spine: Spine) -> ValidatedPair | None:
    """Return a pair when ``spine`` conforms to ``signature``, otherwise ``None``."""

    if not is_valid_spine(signature, spine):
        return None
    return ValidatedPair(signature, spine, _token=_CONSTRUCTION_TOKEN)


__all__ = ["ValidatedPair", "make_validated_pair"]
