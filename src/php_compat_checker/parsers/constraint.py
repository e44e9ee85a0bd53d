"""Parse composer-style version constraints into a ConstraintExpression.

Supported expressions:
- exact versions, optionally ``=``/``==`` or ``v`` prefixed (e.g., "8.1", "=8.1.0")
- caret ranges ^x.y.z → >=x.y.z,<x+1.0.0 (tighter when x is 0)
- tilde ranges ~x.y.z → >=x.y.z,<x.y+1.0 and ~x.y → >=x.y,<x+1.0
- comparators >=, >, <=, <, != and <> (an operator may be followed by spaces)
- wildcards "*", "*.*", "8.*", "8.*.*", "8.1.x"
- a trailing stability flag ("^8.1@dev", ">=8.1@stable"), which is ignored
- hyphen ranges "8.0 - 8.3"
- AND by whitespace or comma, OR by "||" (or the legacy single "|")
"""

from __future__ import annotations

import re

from ..errors import MalformedConstraintError
from ..models.constraint import Clause, ClauseKind, ConstraintExpression
from ..models.version import Version

_OR_SPLIT = re.compile(r"\s*\|\|?\s*")
_AND_SPLIT = re.compile(r"\s*,\s*|\s+")

_CLAUSE_RE = re.compile(
    r"(?P<op>\^|~|>=|<>|<=|>|<|!=|==|=)?v?(?P<version>\d+(?:\.\d+){0,2})", re.ASCII
)
_ANY_RE = re.compile(r"v?[*xX](?:\.[*xX])*")
_WILDCARD_RE = re.compile(r"v?(?P<prefix>\d+(?:\.\d+)?)(?:\.[*xX])+", re.ASCII)
_PLAIN_VERSION_RE = re.compile(r"v?(?P<version>\d+(?:\.\d+){0,2})", re.ASCII)
_STABILITY_RE = re.compile(r"(?P<core>[^,\s]*?)@(?:stable|RC|beta|alpha|dev)", re.IGNORECASE)

_DETACHED_OPERATORS = {"^", "~", ">=", "<>", "<=", ">", "<", "!=", "==", "="}
_KIND_BY_OPERATOR = {
    "": ClauseKind.EXACT,
    "=": ClauseKind.EXACT,
    "==": ClauseKind.EXACT,
    "^": ClauseKind.CARET,
    "~": ClauseKind.TILDE,
    "!=": ClauseKind.NOT_EQUAL,
    "<>": ClauseKind.NOT_EQUAL,
}


def _version_from(text: str) -> Version:
    return Version.from_parts(text.split("."))


def parse_clause(token: str, source: str | None = None) -> Clause:
    """Classify a single token.

    Raises:
        MalformedConstraintError: when the token matches no known shape.
    """
    source = token if source is None else source

    # Stability flags only affect which releases are considered, never the bounds.
    core = token
    flagged = _STABILITY_RE.fullmatch(token)
    if flagged:
        core = flagged["core"] or "*"

    if _ANY_RE.fullmatch(core):
        return Clause.any(token)

    wildcard = _WILDCARD_RE.fullmatch(core)
    if wildcard:
        return Clause(ClauseKind.WILDCARD, version=_version_from(wildcard["prefix"]), text=token)

    match = _CLAUSE_RE.fullmatch(core)
    if not match:
        raise MalformedConstraintError(token, source)

    operator = match["op"] or ""
    version = _version_from(match["version"])
    kind = _KIND_BY_OPERATOR.get(operator)
    if kind is None:
        return Clause.range(operator, version, text=token)
    return Clause(kind, version=version, text=token)


def _parse_hyphen(lower_token: str, upper_token: str, source: str) -> list[Clause]:
    text = f"{lower_token} - {upper_token}"
    bounds: list[Version] = []
    for token in (lower_token, upper_token):
        match = _PLAIN_VERSION_RE.fullmatch(token)
        if not match:
            raise MalformedConstraintError(text, source, "hyphen ranges take plain versions")
        bounds.append(_version_from(match["version"]))

    lower, upper = bounds
    clauses = [Clause.range(">=", lower, text=text)]
    # A partial upper bound covers every release it names: "8.0 - 8.3" admits 8.3.x.
    if upper.precision == 3:
        clauses.append(Clause.range("<=", upper, text=text))
    else:
        clauses.append(Clause.range("<", upper.bump_last(), text=text))
    return clauses


def _parse_conjunction(part: str, source: str) -> tuple[Clause, ...]:
    tokens = _AND_SPLIT.split(part)
    clauses: list[Clause] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if not token:
            raise MalformedConstraintError(part, source, "empty clause")
        if token in _DETACHED_OPERATORS and index + 1 < len(tokens):
            index += 1
            token += tokens[index]

        if index + 2 < len(tokens) and tokens[index + 1] == "-":
            clauses.extend(_parse_hyphen(token, tokens[index + 2], source))
            index += 3
            continue

        clauses.append(parse_clause(token, source))
        index += 1

    return tuple(clauses)


def parse_constraint(text: str) -> ConstraintExpression:
    """Parse ``text`` into an OR-of-ANDs expression.

    Raises:
        MalformedConstraintError: for empty input, empty alternatives, or any
            token of unrecognised shape.
    """
    stripped = text.strip()
    if not stripped:
        raise MalformedConstraintError(text, text, "empty constraint")

    alternatives: list[tuple[Clause, ...]] = []
    for part in _OR_SPLIT.split(stripped):
        if not part:
            raise MalformedConstraintError(stripped, text, "empty alternative")
        alternatives.append(_parse_conjunction(part, text))

    return ConstraintExpression(source=text, alternatives=tuple(alternatives))
