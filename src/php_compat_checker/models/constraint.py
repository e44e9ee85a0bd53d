"""Parsed constraint model: an OR of ANDs of clauses."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .version import Version

RANGE_OPERATORS = (">=", "<=", ">", "<")


class ClauseKind(str, Enum):
    EXACT = "exact"
    RANGE = "range"
    CARET = "caret"
    TILDE = "tilde"
    WILDCARD = "wildcard"
    ANY = "any"
    NOT_EQUAL = "not-equal"


@dataclass(frozen=True, slots=True)
class Clause:
    """One atomic comparison within a constraint alternative.

    ``version`` is None only for ``ANY``. ``operator`` is set only for
    ``RANGE``. ``text`` keeps the token the clause was parsed from.
    """

    kind: ClauseKind
    version: Version | None = None
    operator: str | None = None
    text: str = ""

    def __post_init__(self) -> None:
        if self.kind is ClauseKind.ANY:
            if self.version is not None:
                raise ValueError("Wildcard-any clause takes no version")
            return
        if self.version is None:
            raise ValueError(f"{self.kind.value} clause requires a version")
        if self.kind is ClauseKind.RANGE:
            if self.operator not in RANGE_OPERATORS:
                raise ValueError(f"Invalid range operator: {self.operator!r}")
        elif self.operator is not None:
            raise ValueError(f"{self.kind.value} clause takes no operator")

    def __str__(self) -> str:
        return self.text or _render(self)

    @classmethod
    def any(cls, text: str = "*") -> Clause:
        return cls(ClauseKind.ANY, text=text)

    @classmethod
    def range(cls, operator: str, version: Version, text: str = "") -> Clause:
        return cls(ClauseKind.RANGE, version=version, operator=operator, text=text)


def _render(clause: Clause) -> str:
    if clause.kind is ClauseKind.ANY:
        return "*"
    prefix = {
        ClauseKind.EXACT: "",
        ClauseKind.CARET: "^",
        ClauseKind.TILDE: "~",
        ClauseKind.NOT_EQUAL: "!=",
        ClauseKind.RANGE: clause.operator or "",
    }.get(clause.kind, "")
    rendered = f"{prefix}{clause.version}"
    if clause.kind is ClauseKind.WILDCARD:
        rendered += ".*"
    return rendered


@dataclass(frozen=True, slots=True)
class ConstraintExpression:
    """Disjunction of conjunctions; immutable once parsed."""

    source: str
    alternatives: tuple[tuple[Clause, ...], ...]

    def __post_init__(self) -> None:
        if not self.alternatives:
            raise ValueError("Constraint must contain at least one alternative")
        if any(not alternative for alternative in self.alternatives):
            raise ValueError("Constraint alternatives must contain at least one clause")

    def __str__(self) -> str:
        return self.source

    @property
    def clauses(self) -> tuple[Clause, ...]:
        return tuple(clause for alternative in self.alternatives for clause in alternative)
