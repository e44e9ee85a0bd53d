"""Shared fixtures for checker tests."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import pytest

from php_compat_checker.models.repository import RepositoryRecord


@pytest.fixture()
def now() -> datetime:
    return datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def make_record():
    def _make(name: str = "repo", **overrides) -> RepositoryRecord:
        data = {"url": f"https://github.com/acme/{name}"}
        data.update(overrides)
        return RepositoryRecord(name=name, **data)

    return _make


@pytest.fixture()
def write_records(tmp_path: Path):
    """Write a records document and return its path."""

    def _write(repositories: list[dict], **extra) -> Path:
        path = tmp_path / "repositories.json"
        document = {"repositories": repositories, **extra}
        path.write_text(json.dumps(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def no_settings_env(monkeypatch):
    monkeypatch.delenv("PHP_COMPAT_CHECKER_CONFIG", raising=False)
