"""Tests for settings loading."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from php_compat_checker import config
from php_compat_checker.config import ConfigError, Settings, load_settings


def _write(tmp_path: Path, payload) -> Path:
    path = tmp_path / "settings.json"
    path.write_text(payload if isinstance(payload, str) else json.dumps(payload), encoding="utf-8")
    return path


def test_load_explicit_file(tmp_path: Path) -> None:
    path = _write(tmp_path, {"showForks": True, "sweepFloor": 7, "targetVersion": "8.4"})
    assert load_settings(path) == Settings(show_forks=True, sweep_floor=7, target_version="8.4")


def test_defaults_for_empty_object(tmp_path: Path) -> None:
    assert load_settings(_write(tmp_path, {})) == Settings()


def test_env_var_path(tmp_path: Path, monkeypatch) -> None:
    path = _write(tmp_path, {"sweepFloor": 6})
    monkeypatch.setenv("PHP_COMPAT_CHECKER_CONFIG", str(path))
    assert load_settings().sweep_floor == 6


def test_missing_default_file_gives_defaults(tmp_path: Path, monkeypatch, no_settings_env) -> None:
    monkeypatch.setattr(config, "DEFAULT_CONFIG_PATH", tmp_path / "absent.json")
    assert load_settings() == Settings()


def test_missing_explicit_file_raises(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="not found"):
        load_settings(tmp_path / "absent.json")


def test_missing_env_file_raises(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("PHP_COMPAT_CHECKER_CONFIG", str(tmp_path / "absent.json"))
    with pytest.raises(ConfigError, match="not found"):
        load_settings()


@pytest.mark.parametrize(
    ("payload", "message"),
    [
        ("{not json", "Invalid JSON"),
        ([], "must be a JSON object"),
        ({"showForks": "yes"}, "showForks"),
        ({"sweepFloor": -1}, "sweepFloor"),
        ({"sweepFloor": True}, "sweepFloor"),
        ({"targetVersion": 8.4}, "targetVersion"),
        ({"targetVersion": "eight"}, "targetVersion"),
    ],
)
def test_invalid_settings_raise(tmp_path: Path, payload, message: str) -> None:
    with pytest.raises(ConfigError, match=message):
        load_settings(_write(tmp_path, payload))


def test_repository_settings_file_is_valid(no_settings_env) -> None:
    assert load_settings(config.DEFAULT_CONFIG_PATH) == Settings()
