"""php-compat-checker core package.

Evaluates composer ``require.php`` constraints against a target PHP version
and flags constraints that would also admit untested future major versions.
The engine is pure; fetching repositories and composer.json files is left to
the caller.
"""

from .errors import ConstraintEvaluationError, MalformedConstraintError, MalformedVersionError
from .matching import satisfies
from .models import Clause, ClauseKind, ConstraintExpression, Version
from .openness import DEFAULT_SWEEP_FLOOR, is_too_open
from .parsers.constraint import parse_constraint

__all__ = [
    "Clause",
    "ClauseKind",
    "ConstraintEvaluationError",
    "ConstraintExpression",
    "DEFAULT_SWEEP_FLOOR",
    "MalformedConstraintError",
    "MalformedVersionError",
    "Version",
    "core",
    "is_too_open",
    "parse_constraint",
    "satisfies",
]
