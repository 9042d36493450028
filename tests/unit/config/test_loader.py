"""
spinegen — unit tests for settings loader

File: tests/unit/config/test_loader.py
Last updated: 2026-10-19

Purpose
- Validate deterministic settings loading from defaults, TOML, env overrides, and explicit overrides.

What this test file should cover
- Precedence: overrides > env > file > defaults.
- Discovery of spinegen.toml and [tool.spinegen] in pyproject.toml.
- Env var coercion and actionable errors.

Functional requirements
- Works offline, never reads the real process environment in tests.

Non-functional requirements
- Deterministic output across repeated loads.
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from spinegen.config.loader import ConfigLoadError, dump_settings, load_settings
from spinegen.config.schema import ConfigValidationError, GenerationSettings
from spinegen.gen.core import constant, generate, sized

pytestmark = pytest.mark.unit


def _write(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")


def test_defaults_when_nothing_is_configured(tmp_path: Path) -> None:
    assert load_settings(search_dir=tmp_path, environ={}) == GenerationSettings()


def test_loader_precedence_default_file_env_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "spinegen.toml"
    _write(config_path, "default_size = 4\nmax_trail_depth = 40\n")

    file_loaded = load_settings(config_path, environ={})
    env_loaded = load_settings(config_path, environ={"SPINEGEN_DEFAULT_SIZE": "6"})
    override_loaded = load_settings(
        config_path,
        environ={"SPINEGEN_DEFAULT_SIZE": "6"},
        overrides={"default_size": 7},
    )

    assert file_loaded.default_size == 4
    assert env_loaded.default_size == 6
    assert override_loaded.default_size == 7
    assert override_loaded.max_trail_depth == 40


def test_dedicated_file_is_discovered_before_pyproject(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", "[tool.spinegen]\ndefault_size = 2\n")
    assert load_settings(search_dir=tmp_path, environ={}).default_size == 2

    _write(tmp_path / "spinegen.toml", "default_size = 3\n")
    assert load_settings(search_dir=tmp_path, environ={}).default_size == 3


def test_pyproject_without_tool_table_uses_defaults(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", '[project]\nname = "demo"\n')

    assert load_settings(search_dir=tmp_path, environ={}) == GenerationSettings()


def test_explicit_pyproject_path_reads_tool_table(tmp_path: Path) -> None:
    path = tmp_path / "pyproject.toml"
    _write(path, "[tool.spinegen]\nseed = 99\nlog_level = \"debug\"\n")

    loaded = load_settings(path, environ={})

    assert loaded.seed == 99
    assert loaded.log_level == "DEBUG"


@pytest.mark.parametrize(
    ("env", "expected"),
    [
        ({"SPINEGEN_SEED": "42"}, {"seed": 42}),
        ({"SPINEGEN_SEED": "none"}, {"seed": None}),
        ({"SPINEGEN_LOG_JSON": "off"}, {"log_json": False}),
        ({"SPINEGEN_LOG_JSON": "Yes"}, {"log_json": True}),
        ({"SPINEGEN_LOG_LEVEL": " info "}, {"log_level": "INFO"}),
        ({"SPINEGEN_MAX_REJECTED_DRAWS": "5"}, {"max_rejected_draws": 5}),
        ({"SPINEGEN_MAX_SPINE_NODES": "500"}, {"max_spine_nodes": 500}),
    ],
)
def test_env_coercion(tmp_path: Path, env: dict[str, str], expected: dict[str, object]) -> None:
    loaded = load_settings(search_dir=tmp_path, environ=env).to_dict()

    for key, value in expected.items():
        assert loaded[key] == value


@pytest.mark.parametrize(
    "env",
    [
        {"SPINEGEN_DEFAULT_SIZE": "ten"},
        {"SPINEGEN_SEED": "0x10"},
        {"SPINEGEN_LOG_JSON": "maybe"},
    ],
)
def test_invalid_env_coercion_raises_actionable_error(tmp_path: Path, env: dict[str, str]) -> None:
    (name,) = env

    with pytest.raises(ConfigLoadError, match=name):
        load_settings(search_dir=tmp_path, environ=env)


def test_invalid_values_are_reported_with_paths(tmp_path: Path) -> None:
    config_path = tmp_path / "spinegen.toml"
    _write(config_path, "default_size = -1\nmax_trail_dept = 3\n")

    with pytest.raises(ConfigValidationError) as excinfo:
        load_settings(config_path, environ={})

    paths = {issue.path for issue in excinfo.value.issues}
    assert paths == {"default_size", "max_trail_dept"}


def test_invalid_toml_and_missing_file(tmp_path: Path) -> None:
    broken = tmp_path / "spinegen.toml"
    _write(broken, "default_size = [\n")

    with pytest.raises(ConfigLoadError, match="invalid TOML"):
        load_settings(broken, environ={})
    with pytest.raises(ConfigLoadError, match="not found"):
        load_settings(tmp_path / "absent.toml", environ={})


def test_non_table_tool_section_is_rejected(tmp_path: Path) -> None:
    _write(tmp_path / "pyproject.toml", '[tool]\nspinegen = "yes"\n')

    with pytest.raises(ConfigLoadError, match="must be a table"):
        load_settings(search_dir=tmp_path, environ={})


def test_dump_is_deterministic_json(tmp_path: Path) -> None:
    loaded = load_settings(search_dir=tmp_path, environ={"SPINEGEN_SEED": "7"})

    first = dump_settings(loaded)
    second = dump_settings(load_settings(search_dir=tmp_path, environ={"SPINEGEN_SEED": "7"}))

    assert first == second
    payload = json.loads(first)
    assert list(payload) == sorted(payload)
    assert payload["seed"] == 7


def test_loaded_settings_drive_generation(tmp_path: Path) -> None:
    loaded = load_settings(search_dir=tmp_path, environ={"SPINEGEN_DEFAULT_SIZE": "3"})

    assert generate(sized(constant), settings=loaded) == 3
