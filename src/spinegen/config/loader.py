"""
spinegen — runtime settings loader.

File: src/spinegen/config/loader.py

Purpose
- Load effective generation settings from defaults, a TOML file, env vars, and
  explicit overrides.

What should be included in this file
- Precedence logic: overrides > env (SPINEGEN_) > file > defaults.
- TOML loading via ``tomllib`` from ``spinegen.toml`` or ``[tool.spinegen]``
  in ``pyproject.toml``.
- Deterministic environment variable mapping and coercion.

Functional requirements
- Reject invalid settings via schema validation.

Non-functional requirements
- Keep loading deterministic and reproducible.
"""

from __future__ import annotations

import json
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Final, Literal

from spinegen.config.schema import GenerationSettings, settings_from_mapping
from spinegen.constants import ENV_PREFIX, PYPROJECT_FILE_NAME, SETTINGS_FILE_NAME
from spinegen.errors import SpinegenError

_BOOLEAN_TRUE: Final[frozenset[str]] = frozenset({"1", "true", "t", "yes", "y", "on"})
_BOOLEAN_FALSE: Final[frozenset[str]] = frozenset({"0", "false", "f", "no", "n", "off"})
_NULL_VALUES: Final[frozenset[str]] = frozenset({"", "none", "null"})

_EnvKind = Literal["int", "optional_int", "str", "bool"]

_ENV_BINDINGS: Final[dict[str, _EnvKind]] = {
    "default_size": "int",
    "max_trail_depth": "int",
    "max_rejected_draws": "int",
    "max_spine_nodes": "int",
    "seed": "optional_int",
    "log_level": "str",
    "log_json": "bool",
}


class ConfigLoadError(SpinegenError, ValueError):
    """Raised when settings cannot be loaded or overrides cannot be coerced."""


def load_settings(
    config_path: str | Path | None = None,
    *,
    overrides: Mapping[str, object] | None = None,
    environ: Mapping[str, str] | None = None,
    search_dir: str | Path | None = None,
) -> GenerationSettings:
    """Load effective settings with precedence: overrides > env > file > defaults."""

    env_map = dict(os.environ if environ is None else environ)

    if config_path is not None:
        file_payload = _load_settings_file(Path(config_path).expanduser().resolve())
    else:
        file_payload = _discover_settings(Path.cwd() if search_dir is None else Path(search_dir))

    merged: dict[str, Any] = dict(file_payload)
    merged.update(_collect_env_overrides(env_map))
    merged.update(dict(overrides or {}))
    return settings_from_mapping(merged)


def dump_settings(settings: GenerationSettings) -> str:
    """Return deterministic JSON dump of effective settings."""

    return json.dumps(settings.to_dict(), sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def _discover_settings(directory: Path) -> dict[str, Any]:
    dedicated = directory / SETTINGS_FILE_NAME
    if dedicated.is_file():
        return _load_settings_file(dedicated)
    pyproject = directory / PYPROJECT_FILE_NAME
    if pyproject.is_file():
        parsed = _load_toml_file(pyproject)
        tool = parsed.get("tool")
        section = tool.get("spinegen") if isinstance(tool, Mapping) else None
        if section is None:
            return {}
        if not isinstance(section, Mapping):
            raise ConfigLoadError(f"[tool.spinegen] must be a table: {pyproject}")
        return dict(section)
    return {}


def _load_settings_file(path: Path) -> dict[str, Any]:
    parsed = _load_toml_file(path)
    if path.name == PYPROJECT_FILE_NAME:
        tool = parsed.get("tool")
        section = tool.get("spinegen", {}) if isinstance(tool, Mapping) else {}
        if not isinstance(section, Mapping):
            raise ConfigLoadError(f"[tool.spinegen] must be a table: {path}")
        return dict(section)
    return parsed


def _load_toml_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        raise ConfigLoadError(f"settings file not found: {path}")

    try:
        with path.open("rb") as handle:
            parsed = tomllib.load(handle)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigLoadError(f"invalid TOML in {path}: {exc}") from exc
    except OSError as exc:
        raise ConfigLoadError(f"unable to read settings file {path}: {exc}") from exc

    return parsed


def _collect_env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for key in sorted(_ENV_BINDINGS):
        env_name = f"{ENV_PREFIX}{key.upper()}"
        raw = environ.get(env_name)
        if raw is None:
            continue
        overrides[key] = _coerce_env(raw, _ENV_BINDINGS[key], env_name)
    return overrides


def _coerce_env(raw: str, value_type: _EnvKind, env_name: str) -> object:
    value = raw.strip()
    if value_type == "str":
        return value
    if value_type == "bool":
        lowered = value.lower()
        if lowered in _BOOLEAN_TRUE:
            return True
        if lowered in _BOOLEAN_FALSE:
            return False
        raise ConfigLoadError(f"{env_name} must be a boolean (true/false/1/0/yes/no/on/off)")
    if value_type == "optional_int" and value.lower() in _NULL_VALUES:
        return None
    try:
        return int(value)
    except ValueError as exc:
        raise ConfigLoadError(f"{env_name} must be an integer") from exc


__all__ = ["ConfigLoadError", "dump_settings", "load_settings"]
