"""Data models for the PHP compatibility checker."""

from __future__ import annotations

from .constraint import Clause, ClauseKind, ConstraintExpression
from .repository import RepositoryRecord
from .result import CompatibilityStatus, RepositoryResult
from .version import Version

__all__ = [
    "Clause",
    "ClauseKind",
    "CompatibilityStatus",
    "ConstraintExpression",
    "RepositoryRecord",
    "RepositoryResult",
    "Version",
]
