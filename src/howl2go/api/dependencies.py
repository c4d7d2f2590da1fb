"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Header, Request

from howl2go.domain.errors import InvalidQuery
from howl2go.domain.sessions import SessionContext

if TYPE_CHECKING:
    from howl2go.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the app."""
    return request.app.state.container


def get_session(
    x_session_id: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None),
) -> SessionContext:
    """Build the session context set by the upstream session and auth layers."""
    if not x_session_id or not x_session_id.strip():
        raise InvalidQuery("X-Session-Id header is required")
    user_id = x_user_id.strip() if x_user_id and x_user_id.strip() else None
    return SessionContext(session_id=x_session_id.strip(), user_id=user_id)


def get_user_id(x_user_id: str | None = Header(default=None)) -> str | None:
    """Return the authenticated user id, if any."""
    if x_user_id and x_user_id.strip():
        return x_user_id.strip()
    return None
