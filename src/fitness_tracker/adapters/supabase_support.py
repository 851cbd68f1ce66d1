"""Shared helpers for Supabase repositories."""

from datetime import UTC, datetime
from typing import Any

from postgrest.exceptions import APIError

from fitness_tracker.domain.errors import StoreError

UNIQUE_VIOLATION = "23505"


def execute(query: Any) -> list[dict[str, Any]]:
    """Execute a PostgREST query and return its rows.

    API errors are re-raised as StoreError; unique violations keep their code
    on the error message so callers can translate them.
    """
    try:
        response = query.execute()
    except APIError as exc:
        raise StoreError(f"{exc.code}: {exc.message}") from exc
    return list(response.data or [])


def is_unique_violation(exc: StoreError) -> bool:
    """Return True when a StoreError came from a unique constraint."""
    return str(exc).startswith(f"{UNIQUE_VIOLATION}:")


def parse_timestamp(raw: object) -> datetime:
    """Parse a timestamptz column into an aware datetime."""
    if not isinstance(raw, str) or not raw:
        raise StoreError(f"Invalid timestamp value: {raw!r}")
    parsed = datetime.fromisoformat(raw)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
