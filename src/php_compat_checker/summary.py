"""Human-readable Markdown summary of a compatibility report."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def format_age(last_commit: str | None, now: datetime) -> str:
    """Render a push timestamp as "Today", "3 days ago", "2 months ago", ..."""
    if not last_commit:
        return "N/A"

    pushed = datetime.fromisoformat(last_commit.replace("Z", "+00:00"))
    if pushed.tzinfo is None:
        pushed = pushed.replace(tzinfo=timezone.utc)
    days = int((now - pushed).total_seconds() // 86400)

    if days < 1:
        return "Today"
    if days < 30:
        return f"{days} day{'s' if days > 1 else ''} ago"
    if days < 365:
        months = days // 30
        return f"{months} month{'s' if months > 1 else ''} ago"
    years = days // 365
    return f"{years} year{'s' if years > 1 else ''} ago"


def _cell(text: str) -> str:
    # "||" constraints would otherwise split the table row.
    return text.replace("|", "\\|")


def render_summary(report: dict[str, Any], now: datetime | None = None) -> str:
    """Return a Markdown string with totals and a table of repositories."""
    now = now or datetime.now(timezone.utc)
    totals = report.get("totals", {})
    repositories = report.get("repositories", [])

    lines = []
    lines.append(f"# PHP {report.get('targetVersion', '?')} Compatibility Summary")
    lines.append("")
    lines.append("| Needs Attention | Incompatible | Too Open | Compatible | No composer.json |")
    lines.append("| --- | --- | --- | --- | --- |")
    lines.append(
        f"| {totals.get('needsAttention', 0)} | {totals.get('incompatible', 0)} "
        f"| {totals.get('tooOpen', 0)} | {totals.get('compatible', 0)} "
        f"| {totals.get('noComposer', 0)} |"
    )
    lines.append("")
    lines.append("| Repository | PHP Requirement | Last Commit | Status |")
    lines.append("| --- | --- | --- | --- |")

    for repo in repositories:
        name = _cell(repo.get("name", ""))
        url = repo.get("url")
        cell = f"[{name}]({url})" if url else name
        if repo.get("isFork"):
            cell += " (fork)"

        requirement = _cell(repo.get("phpRequirement", "N/A"))
        if repo.get("tooOpen"):
            requirement += " ⚠️ Too Open"

        age = format_age(repo.get("lastCommit"), now)
        lines.append(f"| {cell} | {requirement} | {age} | {repo.get('status', '')} |")

    if not repositories:
        lines.append("| (no repositories checked) | n/a | n/a | n/a |")

    return "\n".join(lines) + "\n"
