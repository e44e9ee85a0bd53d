"""Per-repository compatibility verdicts."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class CompatibilityStatus(str, Enum):
    COMPATIBLE = "Compatible"
    INCOMPATIBLE = "Incompatible"
    NOT_DECLARED = "N/A"
    NO_COMPOSER = "No composer.json"
    PARSE_ERROR = "Parse Error"
    ERROR = "Error"


_ERROR_STATUSES = {CompatibilityStatus.PARSE_ERROR, CompatibilityStatus.ERROR}


@dataclass(frozen=True)
class RepositoryResult:
    """Outcome of checking one repository against the target PHP version.

    ``compatible`` is None when compatibility could not be decided (no
    composer.json, unparseable constraint, fetch error).
    """

    name: str
    url: str
    is_fork: bool
    last_commit: datetime | None
    php_requirement: str
    compatible: bool | None
    status: CompatibilityStatus
    too_open: bool

    @property
    def needs_attention(self) -> bool:
        return self.compatible is False or self.too_open

    @property
    def category(self) -> str:
        if self.compatible is False:
            return "incompatible"
        if self.compatible is True:
            return "compatible"
        if self.status in _ERROR_STATUSES:
            return "error"
        return "no-composer"

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "url": self.url,
            "isFork": self.is_fork,
            "lastCommit": (
                self.last_commit.isoformat().replace("+00:00", "Z") if self.last_commit else None
            ),
            "phpRequirement": self.php_requirement,
            "compatible": self.compatible,
            "status": self.status.value,
            "tooOpen": self.too_open,
            "needsAttention": self.needs_attention,
            "category": self.category,
        }
