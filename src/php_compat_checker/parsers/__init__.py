"""Constraint parsing."""

from __future__ import annotations

from .constraint import parse_clause, parse_constraint

__all__ = [
    "parse_clause",
    "parse_constraint",
]
