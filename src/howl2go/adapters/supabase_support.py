"""Shared helpers for Supabase adapters."""

from datetime import UTC, datetime
from typing import Any

from howl2go.domain.errors import UpstreamFailure


def execute(query: Any, action: str) -> Any:
    """Run a Supabase query, translating client errors into UpstreamFailure."""
    try:
        return query.execute()
    except Exception as exc:
        raise UpstreamFailure(f"Store request failed: {action}") from exc


def optional_float(value: object) -> float | None:
    """Coerce a nullable numeric column."""
    if value is None or value == "":
        return None
    return float(value)


def parse_timestamp(value: object) -> datetime:
    """Parse an ISO timestamp column, defaulting to the epoch."""
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return datetime.fromtimestamp(0, tz=UTC)
