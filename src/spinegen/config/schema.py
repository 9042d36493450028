"""
spinegen — generation settings schema and validation.

File: src/spinegen/config/schema.py

Purpose
- Define authoritative generation defaults and strict validation rules.

Functional requirements
- Validate settings payloads and return structured issues (field path + message).
- Reject unknown keys so typos in ``spinegen.toml`` do not pass silently.

Non-functional requirements
- Keep rules deterministic and easy to audit.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import asdict, dataclass
from typing import Any, Final

from spinegen.constants import (
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAX_REJECTED_DRAWS,
    DEFAULT_MAX_SPINE_NODES,
    DEFAULT_MAX_TRAIL_DEPTH,
    DEFAULT_SIZE,
)
from spinegen.errors import SpinegenError

_LOG_LEVELS: Final[tuple[str, ...]] = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class GenerationSettings:
    """Runtime knobs for a generation run."""

    default_size: int = DEFAULT_SIZE
    max_trail_depth: int = DEFAULT_MAX_TRAIL_DEPTH
    max_rejected_draws: int = DEFAULT_MAX_REJECTED_DRAWS
    max_spine_nodes: int = DEFAULT_MAX_SPINE_NODES
    seed: int | None = None
    log_level: str = DEFAULT_LOG_LEVEL
    log_json: bool = True

    @property
    def log_level_number(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


DEFAULT_SETTINGS: Final[GenerationSettings] = GenerationSettings()
SETTING_NAMES: Final[tuple[str, ...]] = tuple(DEFAULT_SETTINGS.to_dict())


def default_settings() -> dict[str, Any]:
    """Return a fresh mapping of default settings."""

    return DEFAULT_SETTINGS.to_dict()


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    """Single structured validation failure."""

    path: str
    message: str


class ConfigValidationError(SpinegenError, ValueError):
    """Raised when strict settings validation fails."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid settings:\n{rendered}")


class _IssueCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[ConfigValidationIssue] = []

    def add(self, path: str, message: str) -> None:
        self._items.append(ConfigValidationIssue(path=path, message=message))

    def items(self) -> tuple[ConfigValidationIssue, ...]:
        return tuple(self._items)


def validate_settings(payload: Mapping[str, object]) -> tuple[ConfigValidationIssue, ...]:
    """Return validation issues for a (possibly partial) settings mapping."""

    issues = _IssueCollector()
    if not isinstance(payload, Mapping):
        issues.add("<root>", f"expected table, got {type(payload).__name__}")
        return issues.items()

    for key in sorted(str(item) for item in payload):
        if key not in SETTING_NAMES:
            issues.add(key, "unknown setting")

    _check_int(payload, "default_size", issues, minimum=0)
    _check_int(payload, "max_trail_depth", issues, minimum=1)
    _check_int(payload, "max_rejected_draws", issues, minimum=1)
    _check_int(payload, "max_spine_nodes", issues, minimum=1)

    if "seed" in payload and payload["seed"] is not None:
        _check_int(payload, "seed", issues, minimum=None)

    if "log_level" in payload:
        level = payload["log_level"]
        if not isinstance(level, str):
            issues.add("log_level", f"expected string, got {type(level).__name__}")
        elif level.strip().upper() not in _LOG_LEVELS:
            issues.add("log_level", f"must be one of {list(_LOG_LEVELS)}")

    if "log_json" in payload and not isinstance(payload["log_json"], bool):
        issues.add("log_json", f"expected boolean, got {type(payload['log_json']).__name__}")

    return issues.items()


def settings_from_mapping(payload: Mapping[str, object]) -> GenerationSettings:
    """Build settings from a mapping layered over the defaults."""

    issues = validate_settings(payload)
    if issues:
        raise ConfigValidationError(issues)

    merged = default_settings()
    merged.update(payload)
    merged["log_level"] = str(merged["log_level"]).strip().upper()
    return GenerationSettings(**merged)


def _check_int(
    payload: Mapping[str, object],
    key: str,
    issues: _IssueCollector,
    *,
    minimum: int | None,
) -> None:
    if key not in payload:
        return
    value = payload[key]
    if isinstance(value, bool) or not isinstance(value, int):
        issues.add(key, f"expected integer, got {type(value).__name__}")
        return
    if minimum is not None and value < minimum:
        issues.add(key, f"must be >= {minimum}")


__all__ = [
    "DEFAULT_SETTINGS",
    "SETTING_NAMES",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "GenerationSettings",
    "default_settings",
    "settings_from_mapping",
    "validate_settings",
]
