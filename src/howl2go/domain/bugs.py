"""Domain models for user-submitted bug reports."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BugSeverity(str, Enum):
    """How badly a bug affects the reporter."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class BugStatus(str, Enum):
    """Triage state of a bug report."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


@dataclass(frozen=True)
class BugReport:
    """A bug report filed by a signed-in user."""

    id: str
    user_id: str
    title: str
    description: str
    severity: BugSeverity
    status: BugStatus
    created_at: datetime
    page_url: str | None = None


def serialize_bug_report(report: BugReport) -> dict[str, object]:
    """Render a bug report as a JSON-friendly dict."""
    return {
        "id": report.id,
        "user_id": report.user_id,
        "title": report.title,
        "description": report.description,
        "severity": report.severity.value,
        "status": report.status.value,
        "page_url": report.page_url,
        "created_at": report.created_at.isoformat(),
    }
