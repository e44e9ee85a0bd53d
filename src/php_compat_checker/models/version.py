"""Numeric version model used by the constraint engine."""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import total_ordering

from ..errors import MalformedVersionError

VERSION_PATTERN = re.compile(r"\d+(\.\d+){0,2}", re.ASCII)

PROBE_COMPONENT = 999


@total_ordering
@dataclass(frozen=True, eq=False, slots=True)
class Version:
    """A ``major.minor.patch`` triple.

    ``precision`` records how many components were actually written (``8`` is
    1, ``8.1`` is 2). Comparison, equality and hashing ignore it and treat the
    missing components as zero; range builders use it to pick bounds.
    """

    major: int
    minor: int = 0
    patch: int = 0
    precision: int = 3

    def __post_init__(self) -> None:
        if min(self.major, self.minor, self.patch) < 0:
            raise ValueError("Version components must be non-negative")
        if self.precision not in (1, 2, 3):
            raise ValueError(f"Invalid precision: {self.precision}")

    @property
    def key(self) -> tuple[int, int, int]:
        return (self.major, self.minor, self.patch)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.key == other.key

    def __lt__(self, other: Version) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __str__(self) -> str:
        return ".".join(str(part) for part in self.key[: self.precision])

    def next_major(self) -> Version:
        return Version(self.major + 1, 0, 0)

    def next_minor(self) -> Version:
        return Version(self.major, self.minor + 1, 0)

    def next_patch(self) -> Version:
        return Version(self.major, self.minor, self.patch + 1)

    def bump_last(self) -> Version:
        """Increment the last written component (``8.3`` -> ``8.4.0``)."""
        if self.precision == 1:
            return self.next_major()
        if self.precision == 2:
            return self.next_minor()
        return self.next_patch()

    @classmethod
    def from_parts(cls, parts: list[str]) -> Version:
        numbers = [int(part) for part in parts]
        precision = len(numbers)
        numbers.extend([0] * (3 - precision))
        return cls(numbers[0], numbers[1], numbers[2], precision=precision)

    @classmethod
    def parse(cls, value: str) -> Version:
        """Parse a concrete target version such as ``8.4`` or ``8.4.1``.

        Raises:
            MalformedVersionError: for empty strings, letters, or more than
                three components.
        """
        if not value or not VERSION_PATTERN.fullmatch(value):
            raise MalformedVersionError(value)
        return cls.from_parts(value.split("."))

    @classmethod
    def probe(cls, major: int) -> Version:
        """Synthetic ``major.999.999`` version used by the openness sweep."""
        return cls(major, PROBE_COMPONENT, PROBE_COMPONENT)
