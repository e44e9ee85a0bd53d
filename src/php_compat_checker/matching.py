"""Decide whether a concrete version satisfies a constraint.

Each clause kind maps onto a half-open interval ``[lower, upper)`` following
composer conventions:

- caret ``^X.Y.Z``   → ``[X.Y.Z, (X+1).0.0)``; with ``X == 0`` the upper bound
  moves to the first non-zero written component (``^0.3`` → ``<0.4.0``,
  ``^0.0.3`` → ``<0.0.4``)
- tilde ``~X.Y.Z``   → ``[X.Y.Z, X.(Y+1).0)``; ``~X.Y`` and ``~X`` → ``<(X+1).0.0``
- wildcard ``X.Y.*`` → the written prefix must match

Exact clauses compare the zero-padded triple, so ``8`` equals ``8.0.0`` but
never ``8.1``.
"""

from __future__ import annotations

from .models.constraint import Clause, ClauseKind, ConstraintExpression
from .models.version import Version
from .parsers.constraint import parse_constraint


def _caret_upper(base: Version) -> Version:
    if base.major != 0 or base.precision == 1:
        return base.next_major()
    if base.minor != 0 or base.precision == 2:
        return base.next_minor()
    return base.next_patch()


def _tilde_upper(base: Version) -> Version:
    if base.precision == 3:
        return base.next_minor()
    return base.next_major()


def clause_matches(clause: Clause, target: Version) -> bool:
    """Evaluate one clause against ``target``."""
    kind = clause.kind
    if kind is ClauseKind.ANY:
        return True

    base = clause.version
    if base is None:
        raise ValueError(f"{kind.value} clause without a version")

    if kind is ClauseKind.EXACT:
        return target == base
    if kind is ClauseKind.NOT_EQUAL:
        return target != base
    if kind is ClauseKind.CARET:
        return base <= target < _caret_upper(base)
    if kind is ClauseKind.TILDE:
        return base <= target < _tilde_upper(base)
    if kind is ClauseKind.WILDCARD:
        return target.key[: base.precision] == base.key[: base.precision]

    operator = clause.operator
    if operator == ">=":
        return target >= base
    if operator == ">":
        return target > base
    if operator == "<=":
        return target <= base
    if operator == "<":
        return target < base
    raise ValueError(f"Unsupported clause: {clause!r}")


def expression_matches(expression: ConstraintExpression, target: Version) -> bool:
    """True iff some alternative has every clause satisfied."""
    return any(
        all(clause_matches(clause, target) for clause in alternative)
        for alternative in expression.alternatives
    )


def satisfies(constraint: str | ConstraintExpression, target: str | Version) -> bool:
    """Check whether ``target`` satisfies ``constraint``.

    The target version is validated before the constraint is parsed.

    Raises:
        MalformedVersionError: if ``target`` is not ``X[.Y[.Z]]``.
        MalformedConstraintError: if ``constraint`` cannot be parsed.
    """
    version = target if isinstance(target, Version) else Version.parse(target)
    expression = (
        constraint
        if isinstance(constraint, ConstraintExpression)
        else parse_constraint(constraint)
    )
    return expression_matches(expression, version)
