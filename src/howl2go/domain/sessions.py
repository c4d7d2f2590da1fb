"""Per-request session context."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionContext:
    """Identifies the browser session and, when authenticated, the user."""

    session_id: str
    user_id: str | None = None
