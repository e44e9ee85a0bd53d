"""Tests for repository classification and the file-driven check."""

from __future__ import annotations

import logging
from datetime import datetime, timezone

import pytest

from php_compat_checker.config import ConfigError, Settings
from php_compat_checker.core import (
    check_inventory,
    check_repositories,
    evaluate_repository,
    sort_results,
)
from php_compat_checker.errors import MalformedVersionError
from php_compat_checker.models.result import CompatibilityStatus
from php_compat_checker.models.version import Version

TARGET = Version.parse("8.4")


class TestEvaluateRepository:
    def test_compatible_and_too_open(self, make_record) -> None:
        result = evaluate_repository(make_record(php_constraint="^8.1"), TARGET)
        assert result.status is CompatibilityStatus.COMPATIBLE
        assert result.compatible is True
        assert result.too_open is True
        assert result.needs_attention is True
        assert result.php_requirement == "^8.1"

    def test_compatible_and_bounded(self, make_record) -> None:
        result = evaluate_repository(make_record(php_constraint="~8.4.0"), TARGET)
        assert result.status is CompatibilityStatus.COMPATIBLE
        assert result.too_open is False
        assert result.needs_attention is False
        assert result.category == "compatible"

    def test_incompatible(self, make_record) -> None:
        result = evaluate_repository(make_record(php_constraint="~7.4.0"), TARGET)
        assert result.status is CompatibilityStatus.INCOMPATIBLE
        assert result.compatible is False
        assert result.needs_attention is True
        assert result.category == "incompatible"

    def test_parse_error_is_contained(self, make_record, caplog) -> None:
        with caplog.at_level(logging.WARNING, logger="php_compat_checker.core"):
            result = evaluate_repository(make_record(php_constraint="php8 please"), TARGET)
        assert result.status is CompatibilityStatus.PARSE_ERROR
        assert result.compatible is None
        assert result.too_open is False
        assert result.php_requirement.startswith("php8 please (Error: ")
        assert result.category == "error"
        assert "php8 please" in caplog.text

    def test_missing_php_requirement_is_open(self, make_record) -> None:
        result = evaluate_repository(make_record(), TARGET)
        assert result.status is CompatibilityStatus.NOT_DECLARED
        assert result.php_requirement == "N/A"
        assert result.compatible is False
        assert result.too_open is True

    def test_no_composer_json(self, make_record) -> None:
        result = evaluate_repository(make_record(has_composer_json=False), TARGET)
        assert result.status is CompatibilityStatus.NO_COMPOSER
        assert result.compatible is None
        assert result.needs_attention is False
        assert result.category == "no-composer"

    def test_fetch_error(self, make_record) -> None:
        result = evaluate_repository(make_record(error="HTTP 500"), TARGET)
        assert result.status is CompatibilityStatus.ERROR
        assert result.php_requirement == "Error: HTTP 500"
        assert result.category == "error"

    def test_sweep_floor_is_passed_through(self, make_record) -> None:
        record = make_record(php_constraint="<6.0")
        assert evaluate_repository(record, TARGET, sweep_floor=5).too_open is True
        assert evaluate_repository(record, TARGET, sweep_floor=6).too_open is False


class TestCheckRepositories:
    def test_forks_skipped_by_default(self, make_record) -> None:
        records = [
            make_record("main", php_constraint="^8.1"),
            make_record("forked", php_constraint="^8.1", is_fork=True),
        ]
        assert [r.name for r in check_repositories(records, "8.4")] == ["main"]
        shown = check_repositories(records, "8.4", show_forks=True)
        assert sorted(r.name for r in shown) == ["forked", "main"]

    def test_malformed_target_aborts(self, make_record) -> None:
        with pytest.raises(MalformedVersionError):
            check_repositories([make_record(php_constraint="^8.1")], "latest")

    def test_sorting(self, make_record) -> None:
        def pushed(day: int) -> datetime:
            return datetime(2025, 1, day, tzinfo=timezone.utc)

        records = [
            make_record("ok-old", php_constraint="^8.4", pushed_at=pushed(1)),
            make_record("ok-new", php_constraint="^8.4", pushed_at=pushed(5)),
            make_record("no-composer", has_composer_json=False, pushed_at=pushed(9)),
            make_record("bad-old", php_constraint="^7.4", pushed_at=pushed(2)),
            make_record("Bad-same", php_constraint="^7.4", pushed_at=pushed(3)),
            make_record("alpha-same", php_constraint="^7.4", pushed_at=pushed(3)),
            make_record("bad-never", php_constraint="^7.4"),
        ]
        names = [r.name for r in check_repositories(records, "8.4")]
        assert names == [
            "alpha-same",
            "Bad-same",
            "bad-old",
            "bad-never",
            "no-composer",
            "ok-new",
            "ok-old",
        ]

    def test_sort_results_is_stable_for_empty_input(self) -> None:
        assert sort_results([]) == []


class TestCheckInventory:
    def test_report_from_file(self, write_records) -> None:
        path = write_records(
            [
                {"name": "api", "url": "https://github.com/acme/api", "phpConstraint": "^8.1"},
                {"name": "legacy", "url": "https://github.com/acme/legacy", "phpConstraint": "^7.4"},
                {"name": "site", "url": "https://github.com/acme/site", "hasComposerJson": False},
            ]
        )
        report = check_inventory(path, target_version="8.4", settings=Settings())
        assert report["targetVersion"] == "8.4"
        assert report["hasFindings"] is True
        assert [r["name"] for r in report["repositories"]] == ["legacy", "site", "api"]
        assert report["totals"]["repositories"] == 3

    def test_target_from_document_then_settings(self, write_records) -> None:
        repos = [{"name": "api", "url": "u", "phpConstraint": "~8.3.0"}]
        from_doc = check_inventory(write_records(repos, targetVersion="8.3"), settings=Settings())
        assert from_doc["targetVersion"] == "8.3"
        assert from_doc["hasFindings"] is False

        from_settings = check_inventory(
            write_records(repos), settings=Settings(target_version="8.4")
        )
        assert from_settings["targetVersion"] == "8.4"
        assert from_settings["totals"]["incompatible"] == 1

    def test_explicit_empty_target_is_not_replaced(self, write_records) -> None:
        path = write_records([], targetVersion="8.4")
        with pytest.raises(MalformedVersionError):
            check_inventory(path, target_version="", settings=Settings(target_version="8.3"))

    def test_missing_target_raises(self, write_records) -> None:
        with pytest.raises(ConfigError):
            check_inventory(write_records([]), settings=Settings())

    def test_show_forks_override(self, write_records) -> None:
        path = write_records([{"name": "f", "url": "u", "isFork": True, "phpConstraint": "8.4"}])
        assert check_inventory(path, "8.4", settings=Settings())["totals"]["repositories"] == 0
        assert check_inventory(path, "8.4", settings=Settings(show_forks=True))["totals"][
            "repositories"
        ] == 1
        assert (
            check_inventory(path, "8.4", settings=Settings(show_forks=True), show_forks=False)[
                "totals"
            ]["repositories"]
            == 0
        )

    def test_invalid_document_raises(self, write_records) -> None:
        path = write_records([{"name": "api"}])
        with pytest.raises(ValueError, match="url"):
            check_inventory(path, "8.4", settings=Settings())
