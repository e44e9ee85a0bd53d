"""Detect constraints that would also admit untested future major versions."""

from __future__ import annotations

import logging
from collections.abc import Iterator

from .matching import expression_matches
from .models.constraint import ConstraintExpression
from .models.version import Version
from .parsers.constraint import parse_constraint

logger = logging.getLogger(__name__)

# PHP majors below 5 are irrelevant here and only add noise to the sweep.
DEFAULT_SWEEP_FLOOR = 5


def probe_versions(current_major: int, floor: int = DEFAULT_SWEEP_FLOOR) -> Iterator[Version]:
    """Yield ``m.999.999`` for ``m`` from ``floor`` up to ``current_major + 1``."""
    for major in range(floor, current_major + 2):
        yield Version.probe(major)


def is_too_open(
    constraint: str | ConstraintExpression,
    current_major: int,
    floor: int = DEFAULT_SWEEP_FLOOR,
) -> bool:
    """Return True if any probe version satisfies ``constraint``.

    Probing at ``.999.999`` defeats minor and patch upper bounds while still
    respecting an explicit major bound (``<9.0`` rejects ``9.999.999``).

    Raises:
        MalformedConstraintError: if ``constraint`` cannot be parsed.
    """
    expression = (
        constraint
        if isinstance(constraint, ConstraintExpression)
        else parse_constraint(constraint)
    )
    for probe in probe_versions(current_major, floor):
        if expression_matches(expression, probe):
            logger.debug("Constraint %r admits probe %s", expression.source, probe)
            return True
    return False
