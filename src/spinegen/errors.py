"""
spinegen — error taxonomy

File: src/spinegen/errors.py

Purpose
- Separate per-draw recoverable conditions from caller contract violations and
  internal invariant breaches.

Functional requirements
- ``DrawRejected`` is absorbed by the retry loop in ``spinegen.gen.generate``.
- Everything else propagates to the caller unchanged.
"""

from __future__ import annotations


class SpinegenError(Exception):
    """Base class for all spinegen errors."""


class DrawRejected(SpinegenError):
    """A single random draw was abandoned; the runner may retry it."""

    def __init__(self, reason: str = "draw rejected") -> None:
        super().__init__(reason)
        self.reason = reason


class GenerationExhaustedError(SpinegenError):
    """Raised when too many consecutive draws were rejected."""

    def __init__(self, attempts: int, last_reason: str | None) -> None:
        detail = f": {last_reason}" if last_reason else ""
        super().__init__(f"gave up after {attempts} rejected draw(s){detail}")
        self.attempts = attempts
        self.last_reason = last_reason


class DegenerateSignatureError(SpinegenError, ValueError):
    """Raised when a choice must be made among zero alternatives."""


class SpineDivergedError(SpinegenError):
    """Raised when spine generation exceeds its trail depth or node limit."""

    def __init__(self, type_name: str, depth: int, *, nodes: int | None = None) -> None:
        if nodes is None:
            message = (
                f"spine generation for product {type_name!r} exceeded trail depth {depth}; "
                "the signature has no terminating constructor"
            )
        else:
            message = (
                f"spine generation for product {type_name!r} exceeded {nodes} nodes; "
                "recursion through arrays or records outgrows the constructor weighting"
            )
        super().__init__(message)
        self.type_name = type_name
        self.depth = depth
        self.nodes = nodes


class ReflectionError(SpinegenError, TypeError):
    """Raised when a Python type has no signature."""


class ReificationError(SpinegenError, ValueError):
    """Raised when a spine cannot be turned back into a value of a type."""


class InvariantViolationError(SpinegenError, AssertionError):
    """Raised when a conforming spine could not be reified."""


class ShapeFormatError(SpinegenError, ValueError):
    """Raised when serialized shape data is malformed."""


__all__ = [
    "DegenerateSignatureError",
    "DrawRejected",
    "GenerationExhaustedError",
    "InvariantViolationError",
    "ReflectionError",
    "ReificationError",
    "ShapeFormatError",
    "SpineDivergedError",
    "SpinegenError",
]
