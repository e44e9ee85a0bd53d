"""Errors raised by the constraint evaluation engine."""

from __future__ import annotations


class ConstraintEvaluationError(ValueError):
    """Base error for inputs the engine refuses to evaluate."""


class MalformedVersionError(ConstraintEvaluationError):
    """Raised when a target version is not a plain ``X[.Y[.Z]]`` string."""

    def __init__(self, value: str) -> None:
        super().__init__(f"Invalid target version format: {value!r}")
        self.value = value


class MalformedConstraintError(ConstraintEvaluationError):
    """Raised when a constraint contains a token of no recognised shape."""

    def __init__(self, token: str, constraint: str, reason: str | None = None) -> None:
        message = f"Could not parse version constraint {constraint!r}"
        if token and token != constraint:
            message += f": unrecognised token {token!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)
        self.token = token
        self.constraint = constraint
