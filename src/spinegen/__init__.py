"""
spinegen — generic random generation over algebraic data shapes

File: src/spinegen/__init__.py

Purpose
- Package root. Generates random signatures and conforming spines, produces
  random values of reflected Python types, and perturbs generators by the
  shape of a value for property-based testing.

Functional requirements
- Must not have side effects at import time (no settings loading, no logging setup).
"""

from spinegen.config import GenerationSettings, load_settings
from spinegen.errors import (
    DegenerateSignatureError,
    DrawRejected,
    GenerationExhaustedError,
    InvariantViolationError,
    ReflectionError,
    ReificationError,
    ShapeFormatError,
    SpineDivergedError,
    SpinegenError,
)
from spinegen.gen import Gen, Perturbation, generate, sample
from spinegen.generic import (
    coarbitrary_spine,
    g_arbitrary,
    g_coarbitrary,
    gen_signature,
    gen_spine,
    random_validated_pair,
)
from spinegen.reflect import Char, reify, sealed, signature_of, spine_of
from spinegen.shapes import ValidatedPair, is_valid_spine, make_validated_pair

__version__ = "0.1.0"

__all__ = [
    "Char",
    "DegenerateSignatureError",
    "DrawRejected",
    "Gen",
    "GenerationExhaustedError",
    "GenerationSettings",
    "InvariantViolationError",
    "Perturbation",
    "ReflectionError",
    "ReificationError",
    "ShapeFormatError",
    "SpineDivergedError",
    "SpinegenError",
    "ValidatedPair",
    "__version__",
    "coarbitrary_spine",
    "g_arbitrary",
    "g_coarbitrary",
    "gen_signature",
    "gen_spine",
    "generate",
    "is_valid_spine",
    "load_settings",
    "make_validated_pair",
    "random_validated_pair",
    "reify",
    "sample",
    "sealed",
    "signature_of",
    "spine_of",
]
