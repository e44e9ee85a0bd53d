"""Report aggregation and schema-friendly output."""

from __future__ import annotations

from typing import Any
from collections.abc import Sequence

from .models.result import RepositoryResult


def aggregate(results: Sequence[RepositoryResult], target_version: str) -> dict[str, Any]:
    """Aggregate per-repository verdicts into a single report.

    Results are passed through in the order given; callers sort them first.
    ``noComposer`` counts every repository whose compatibility is undecided,
    which includes parse and fetch errors.
    """

    needs_attention = sum(1 for r in results if r.needs_attention)

    report: dict[str, Any] = {
        "version": "1",
        "targetVersion": target_version,
        "hasFindings": needs_attention > 0,
        "repositories": [r.to_dict() for r in results],
        "totals": {
            "repositories": len(results),
            "needsAttention": needs_attention,
            "incompatible": sum(1 for r in results if r.compatible is False),
            "tooOpen": sum(1 for r in results if r.too_open),
            "compatible": sum(1 for r in results if r.compatible is True),
            "noComposer": sum(1 for r in results if r.compatible is None),
        },
    }

    return report
