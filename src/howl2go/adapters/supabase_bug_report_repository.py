"""Supabase implementation for bug reports."""

from dataclasses import dataclass

from supabase import Client

from howl2go.adapters.supabase_support import execute, parse_timestamp
from howl2go.domain.bugs import BugReport, BugSeverity, BugStatus
from howl2go.domain.errors import UpstreamFailure
from howl2go.services.bugs import BugReportRepository

_TABLE = "bug_reports"


@dataclass
class SupabaseBugReportRepository(BugReportRepository):
    """Supabase-backed bug report storage."""

    client: Client

    def create_report(  # noqa: PLR0913
        self,
        user_id: str,
        title: str,
        description: str,
        severity: BugSeverity,
        page_url: str | None,
    ) -> BugReport:
        """Create an open bug report and return it."""
        response = execute(
            self.client.table(_TABLE).insert(
                {
                    "user_id": user_id,
                    "title": title,
                    "description": description,
                    "severity": severity.value,
                    "status": BugStatus.OPEN.value,
                    "page_url": page_url,
                }
            ),
            "create_bug_report",
        )
        if not response.data:
            raise UpstreamFailure("Failed to create bug report")
        return _parse_report(response.data[0])

    def list_reports(self, status: BugStatus | None, limit: int) -> list[BugReport]:
        """Return recent reports, newest first."""
        query = self.client.table(_TABLE).select("*")
        if status is not None:
            query = query.eq("status", status.value)
        response = execute(
            query.order("created_at", desc=True).limit(limit), "list_bug_reports"
        )
        return [_parse_report(row) for row in response.data or []]

    def update_status(self, report_id: str, status: BugStatus) -> BugReport | None:
        """Set a report's status."""
        response = execute(
            self.client.table(_TABLE)
            .update({"status": status.value})
            .eq("id", report_id),
            "update_bug_status",
        )
        if not response.data:
            return None
        return _parse_report(response.data[0])


def _parse_report(row: dict[str, object]) -> BugReport:
    return BugReport(
        id=str(row["id"]),
        user_id=str(row.get("user_id", "")),
        title=str(row.get("title", "")),
        description=str(row.get("description", "")),
        severity=BugSeverity(row.get("severity") or BugSeverity.MEDIUM.value),
        status=BugStatus(row.get("status") or BugStatus.OPEN.value),
        created_at=parse_timestamp(row.get("created_at")),
        page_url=row.get("page_url"),
    )
