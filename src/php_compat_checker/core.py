"""Core checking entrypoints.

This module consumes repository records produced by a fetching step and MUST
NOT perform network I/O itself, so it can be driven by the CLI script, tests,
or any caller that already has the records.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any
from collections.abc import Iterable

from .config import ConfigError, Settings, load_settings
from .errors import ConstraintEvaluationError
from .matching import expression_matches
from .models.repository import RepositoryRecord
from .models.result import CompatibilityStatus, RepositoryResult
from .models.version import Version
from .openness import DEFAULT_SWEEP_FLOOR, is_too_open
from .parsers.constraint import parse_constraint
from .report import aggregate
from .validators.repositories import validate_file

logger = logging.getLogger(__name__)

_CATEGORY_RANK = {False: 0, None: 1, True: 2}


def evaluate_repository(
    record: RepositoryRecord,
    target: Version,
    sweep_floor: int = DEFAULT_SWEEP_FLOOR,
) -> RepositoryResult:
    """Classify a single repository against ``target``.

    Constraint errors are contained here and reported as ``Parse Error`` so
    that one bad composer.json does not abort the whole check.
    """

    def result(
        requirement: str, compatible: bool | None, status: CompatibilityStatus, too_open: bool
    ) -> RepositoryResult:
        return RepositoryResult(
            name=record.name,
            url=record.url,
            is_fork=record.is_fork,
            last_commit=record.pushed_at,
            php_requirement=requirement,
            compatible=compatible,
            status=status,
            too_open=too_open,
        )

    if record.error:
        return result(f"Error: {record.error}", None, CompatibilityStatus.ERROR, False)

    if not record.has_composer_json:
        return result("N/A", None, CompatibilityStatus.NO_COMPOSER, False)

    if record.php_constraint is None:
        # No require.php means any PHP version is accepted, including untested ones.
        return result("N/A", False, CompatibilityStatus.NOT_DECLARED, True)

    constraint = record.php_constraint
    try:
        expression = parse_constraint(constraint)
        compatible = expression_matches(expression, target)
        too_open = is_too_open(expression, target.major, floor=sweep_floor)
    except ConstraintEvaluationError as exc:
        logger.warning("Could not evaluate %s constraint %r: %s", record.name, constraint, exc)
        return result(
            f"{constraint} (Error: {exc})", None, CompatibilityStatus.PARSE_ERROR, False
        )

    status = CompatibilityStatus.COMPATIBLE if compatible else CompatibilityStatus.INCOMPATIBLE
    return result(constraint, compatible, status, too_open)


def _sort_key(result: RepositoryResult) -> tuple[int, float, str]:
    pushed = result.last_commit.timestamp() if result.last_commit else 0.0
    return (_CATEGORY_RANK[result.compatible], -pushed, result.name.casefold())


def sort_results(results: Iterable[RepositoryResult]) -> list[RepositoryResult]:
    """Incompatible first, then undecided, then compatible.

    Within a category the most recently pushed repository comes first; ties
    are broken by case-insensitive name.
    """
    return sorted(results, key=_sort_key)


def check_repositories(
    records: Iterable[RepositoryRecord],
    target_version: str,
    *,
    show_forks: bool = False,
    sweep_floor: int = DEFAULT_SWEEP_FLOOR,
) -> list[RepositoryResult]:
    """Evaluate every record against ``target_version`` and return sorted results.

    Raises:
        MalformedVersionError: if ``target_version`` is malformed; this affects
            every repository so it is not contained per row.
    """
    target = Version.parse(target_version)

    results: list[RepositoryResult] = []
    for record in records:
        if record.is_fork and not show_forks:
            logger.debug("Skipping fork %s", record.name)
            continue
        results.append(evaluate_repository(record, target, sweep_floor))

    return sort_results(results)


def load_records(path: Path) -> tuple[list[RepositoryRecord], str | None]:
    """Read and validate a records document; return records and its target version."""
    document = validate_file(path)
    records = [RepositoryRecord.from_dict(item) for item in document["repositories"]]
    logger.info("Loaded %d repository records from %s", len(records), path)
    return records, document.get("targetVersion")


def check_inventory(
    path: Path,
    target_version: str | None = None,
    settings: Settings | None = None,
    show_forks: bool | None = None,
) -> dict[str, Any]:
    """Check every repository listed in ``path``.

    Params:
        path: JSON document of repository records (see
            schemas/repositories.schema.json)
        target_version: PHP version to check against; when None, falls back
            to the document's ``targetVersion`` and then to the settings
        settings: loaded settings; read from the default location when None
        show_forks: overrides ``settings.show_forks`` when not None

    Returns: dict report (see report.aggregate)
    """
    settings = settings if settings is not None else load_settings()
    records, document_target = load_records(path)

    # An explicit target, even an empty one, is never replaced by a fallback.
    if target_version is not None:
        target = target_version
    else:
        target = document_target or settings.target_version
    if target is None:
        raise ConfigError("No target PHP version given (argument, document or settings)")

    include_forks = settings.show_forks if show_forks is None else show_forks
    results = check_repositories(
        records,
        target,
        show_forks=include_forks,
        sweep_floor=settings.sweep_floor,
    )
    return aggregate(results, target)
