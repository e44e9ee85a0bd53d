"""Repository record model supplied by the fetching collaborator."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from collections.abc import Mapping
from typing import Any


def _parse_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class RepositoryRecord:
    """One repository and its declared ``require.php`` constraint, if any."""

    name: str
    url: str
    is_fork: bool = False
    pushed_at: datetime | None = None
    php_constraint: str | None = None
    has_composer_json: bool = True
    error: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Repository name must be non-empty")
        if self.pushed_at is not None and self.pushed_at.tzinfo is None:
            raise ValueError("pushed_at must be timezone-aware")
        if self.php_constraint is not None and not self.has_composer_json:
            raise ValueError("A PHP constraint requires a composer.json")

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "url": self.url,
            "isFork": self.is_fork,
            "pushedAt": _format_timestamp(self.pushed_at),
            "phpConstraint": self.php_constraint,
            "hasComposerJson": self.has_composer_json,
            "error": self.error,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RepositoryRecord:
        return cls(
            name=str(data.get("name", "")),
            url=str(data.get("url", "")),
            is_fork=bool(data.get("isFork", False)),
            pushed_at=_parse_timestamp(data.get("pushedAt")),
            php_constraint=data.get("phpConstraint"),
            has_composer_json=bool(data.get("hasComposerJson", True)),
            error=data.get("error"),
        )


def _format_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    return value.isoformat().replace("+00:00", "Z")
