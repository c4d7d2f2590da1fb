"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status
from fastapi.responses import HTMLResponse

from howl2go.api.models import BugStatusPayload, FoodPayload
from howl2go.domain.bugs import serialize_bug_report
from howl2go.domain.foods import serialize_food

if TYPE_CHECKING:
    from howl2go.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.get("/dashboard", dependencies=[Depends(require_admin)])
def dashboard(request: Request, top: int = 10) -> dict[str, object]:
    """Return order volume, revenue and the most ordered items."""
    container: AppContainer = request.app.state.container
    return {"success": True, **container.admin_service.dashboard(top)}


@router.get("/orders", dependencies=[Depends(require_admin)])
def list_orders(request: Request, limit: int = 20) -> dict[str, object]:
    """Return recent orders across all users."""
    container: AppContainer = request.app.state.container
    return {"success": True, "orders": container.admin_service.list_orders(limit)}


@router.post(
    "/foods",
    dependencies=[Depends(require_admin)],
    status_code=status.HTTP_201_CREATED,
)
def create_food(payload: FoodPayload, request: Request) -> dict[str, object]:
    """Add a food item to the catalogue."""
    container: AppContainer = request.app.state.container
    food = container.catalog_service.create_food(payload.model_dump(exclude_none=True))
    return {"success": True, "item": serialize_food(food)}


@router.patch("/foods/{food_id}", dependencies=[Depends(require_admin)])
def update_food(
    food_id: str, payload: FoodPayload, request: Request
) -> dict[str, object]:
    """Update fields of a food item."""
    container: AppContainer = request.app.state.container
    food = container.catalog_service.update_food(
        food_id, payload.model_dump(exclude_none=True)
    )
    return {"success": True, "item": serialize_food(food)}


@router.delete("/foods/{food_id}", dependencies=[Depends(require_admin)])
def delete_food(food_id: str, request: Request) -> dict[str, object]:
    """Remove a food item from the catalogue."""
    container: AppContainer = request.app.state.container
    container.catalog_service.delete_food(food_id)
    return {"success": True}


@router.get("/bugs", dependencies=[Depends(require_admin)])
def list_bug_reports(
    request: Request,
    status_filter: str | None = Query(default=None, alias="status"),
    limit: int = 50,
) -> dict[str, object]:
    """Return recent bug reports, optionally only those in one status."""
    container: AppContainer = request.app.state.container
    reports = container.bug_report_service.list_reports(status_filter, limit)
    return {
        "success": True,
        "reports": [serialize_bug_report(report) for report in reports],
        "count": len(reports),
    }


@router.patch("/bugs/{report_id}", dependencies=[Depends(require_admin)])
def update_bug_status(
    report_id: str, payload: BugStatusPayload, request: Request
) -> dict[str, object]:
    """Move a bug report to a new triage status."""
    container: AppContainer = request.app.state.container
    report = container.bug_report_service.update_status(report_id, payload.status)
    return {"success": True, "report": serialize_bug_report(report)}


@router.get("/ui", response_class=HTMLResponse)
async def admin_ui() -> HTMLResponse:
    """Minimal admin UI that consumes the admin API."""
    return HTMLResponse(_ADMIN_UI_HTML)


_ADMIN_UI_HTML = """<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <title>Howl2Go Admin</title>
    <style>
      body { font-family: ui-sans-serif, system-ui, sans-serif; margin: 2rem; }
      h1 { margin-bottom: 0.5rem; }
      .row { margin-bottom: 1rem; }
      input { padding: 0.4rem 0.6rem; width: 320px; }
      button { padding: 0.4rem 0.8rem; margin-right: 0.5rem; }
      pre { background: #f6f6f6; padding: 1rem; overflow: auto; }
    </style>
  </head>
  <body>
    <h1>Howl2Go Admin</h1>
    <div class="row">
      <label>Admin token</label><br />
      <input id="token" type="password" placeholder="X-Admin-Token" />
    </div>
    <div class="row">
      <button onclick="loadEndpoint('/admin/dashboard')">Dashboard</button>
      <button onclick="loadEndpoint('/admin/orders')">Orders</button>
    </div>
    <pre id="output">Ready.</pre>
    <script>
      async function loadEndpoint(path) {
        const token = document.getElementById('token').value;
        const output = document.getElementById('output');
        output.textContent = 'Loading...';
        const res = await fetch(path, {
          headers: { 'X-Admin-Token': token }
        });
        if (!res.ok) {
          output.textContent = 'Error: ' + res.status;
          return;
        }
        const data = await res.json();
        output.textContent = JSON.stringify(data, null, 2);
      }
    </script>
  </body>
</html>
"""
