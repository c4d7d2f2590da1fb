"""Bug report intake endpoint."""

from fastapi import APIRouter, Depends, Request, status

from howl2go.api.dependencies import get_user_id
from howl2go.api.models import BugReportPayload
from howl2go.containers import AppContainer
from howl2go.domain.bugs import serialize_bug_report

router = APIRouter(prefix="/api/bugs", tags=["bugs"])


@router.post("", status_code=status.HTTP_201_CREATED)
def report_bug(
    payload: BugReportPayload,
    request: Request,
    user_id: str | None = Depends(get_user_id),
) -> dict[str, object]:
    """File a bug report for the signed-in user."""
    container: AppContainer = request.app.state.container
    report = container.bug_report_service.submit(
        user_id,
        payload.title,
        payload.description,
        severity=payload.severity,
        page_url=payload.page_url,
    )
    return {"success": True, "report": serialize_bug_report(report)}
