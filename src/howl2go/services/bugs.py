"""Bug report intake and triage."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol, TypeVar

from howl2go.domain.bugs import BugReport, BugSeverity, BugStatus
from howl2go.domain.errors import AuthenticationRequired, InvalidQuery, NotFound

MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 5000

_logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Enum)


class BugReportRepository(Protocol):
    """Persistence interface for bug reports."""

    def create_report(  # noqa: PLR0913
        self,
        user_id: str,
        title: str,
        description: str,
        severity: BugSeverity,
        page_url: str | None,
    ) -> BugReport:
        """Create an open bug report and return it."""

    def list_reports(self, status: BugStatus | None, limit: int) -> list[BugReport]:
        """Return recent reports, optionally only those in one status."""

    def update_status(self, report_id: str, status: BugStatus) -> BugReport | None:
        """Set a report's status, or return None when it does not exist."""


@dataclass
class BugReportService:
    """Application service for bug reports."""

    repository: BugReportRepository

    def submit(  # noqa: PLR0913
        self,
        user_id: str | None,
        title: str,
        description: str,
        severity: str = BugSeverity.MEDIUM.value,
        page_url: str | None = None,
    ) -> BugReport:
        """File a bug report for a signed-in user."""
        if not user_id:
            raise AuthenticationRequired("Authentication required")
        title = title.strip()
        description = description.strip()
        if not title or not description:
            raise InvalidQuery("title and description are required")
        if len(title) > MAX_TITLE_LENGTH:
            raise InvalidQuery("title is too long")
        if len(description) > MAX_DESCRIPTION_LENGTH:
            raise InvalidQuery("description is too long")
        report = self.repository.create_report(
            user_id=user_id,
            title=title,
            description=description,
            severity=_parse(BugSeverity, severity, "severity"),
            page_url=page_url.strip() if page_url and page_url.strip() else None,
        )
        _logger.info(
            "Bug report %s filed by %s severity=%s",
            report.id,
            user_id,
            report.severity.value,
        )
        return report

    def list_reports(
        self, status: str | None = None, limit: int = 50
    ) -> list[BugReport]:
        """Return recent reports for triage."""
        if limit < 1:
            raise InvalidQuery("limit must be a positive integer")
        wanted = _parse(BugStatus, status, "status") if status else None
        return self.repository.list_reports(wanted, limit)

    def update_status(self, report_id: str, status: str) -> BugReport:
        """Move a report to a new triage status."""
        report = self.repository.update_status(
            report_id, _parse(BugStatus, status, "status")
        )
        if report is None:
            raise NotFound("Bug report not found")
        _logger.info("Bug report %s is now %s", report_id, report.status.value)
        return report


def _parse(enum_type: type[E], raw: str, label: str) -> E:
    try:
        return enum_type(raw.strip().lower())
    except ValueError as exc:
        allowed = ", ".join(member.value for member in enum_type)
        raise InvalidQuery(f"{label} must be one of: {allowed}") from exc
