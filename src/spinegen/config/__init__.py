"""
spinegen config package public API.

File: src/spinegen/config/__init__.py

Purpose
- Export settings loading/validation entrypoints and public error types.

Functional requirements
- Support loading from ``spinegen.toml`` / ``[tool.spinegen]`` + ``SPINEGEN_`` env overrides.
- Fail fast with clear structured validation/load errors.
"""

from spinegen.config.loader import ConfigLoadError, dump_settings, load_settings
from spinegen.config.schema import (
    DEFAULT_SETTINGS,
    SETTING_NAMES,
    ConfigValidationError,
    ConfigValidationIssue,
    GenerationSettings,
    default_settings,
    settings_from_mapping,
    validate_settings,
)

__all__ = [
    "DEFAULT_SETTINGS",
    "SETTING_NAMES",
    "ConfigLoadError",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "GenerationSettings",
    "default_settings",
    "dump_settings",
    "load_settings",
    "settings_from_mapping",
    "validate_settings",
]
