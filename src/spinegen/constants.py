"""Stable constants shared across the generation layers."""

from __future__ import annotations

from typing import Final

# Signature generation.
MAX_SIGNATURE_BUDGET: Final[int] = 5

# Constructor weight w(c) = TRAIL_WEIGHT_NUMERATOR / (TRAIL_WEIGHT_OFFSET + trail_count(c)).
TRAIL_WEIGHT_NUMERATOR: Final[int] = 6
TRAIL_WEIGHT_OFFSET: Final[int] = 5

# Runtime defaults (overridable through settings).
DEFAULT_SIZE: Final[int] = 10
DEFAULT_MAX_TRAIL_DEPTH: Final[int] = 100
DEFAULT_MAX_REJECTED_DRAWS: Final[int] = 100
DEFAULT_MAX_SPINE_NODES: Final[int] = 100_000
DEFAULT_LOG_LEVEL: Final[str] = "WARNING"

# Settings discovery.
SETTINGS_FILE_NAME: Final[str] = "spinegen.toml"
PYPROJECT_FILE_NAME: Final[str] = "pyproject.toml"
ENV_PREFIX: Final[str] = "SPINEGEN_"

__all__ = [
    "DEFAULT_LOG_LEVEL",
    "DEFAULT_MAX_REJECTED_DRAWS",
    "DEFAULT_MAX_SPINE_NODES",
    "DEFAULT_MAX_TRAIL_DEPTH",
    "DEFAULT_SIZE",
    "ENV_PREFIX",
    "MAX_SIGNATURE_BUDGET",
    "PYPROJECT_FILE_NAME",
    "SETTINGS_FILE_NAME",
    "TRAIL_WEIGHT_NUMERATOR",
    "TRAIL_WEIGHT_OFFSET",
]
