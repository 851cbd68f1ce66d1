"""Supabase repository for user settings."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_support import execute
from fitness_tracker.services.user_settings import UserSettingsRepository


@dataclass
class SupabaseUserSettingsRepository(UserSettingsRepository):
    """Supabase implementation for user settings."""

    client: Client

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the stored timezone for a user."""
        rows = execute(
            self.client.table("user_settings")
            .select("timezone")
            .eq("user_id", str(user_id))
            .limit(1)
        )
        if not rows:
            return None
        return rows[0].get("timezone")

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Create or update the user's timezone."""
        execute(
            self.client.table("user_settings").upsert(
                {
                    "user_id": str(user_id),
                    "timezone": timezone,
                    "updated_at": datetime.now(tz=UTC).isoformat(),
                },
                on_conflict="user_id",
            )
        )
