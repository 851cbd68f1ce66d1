"""Supabase-backed user repository."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_support import execute, parse_timestamp
from fitness_tracker.domain.errors import StoreError
from fitness_tracker.domain.models import UserRecord
from fitness_tracker.services.users import PROFILE_FIELDS, UserRepository

_COLUMNS = (
    "id, name, email, created_at, weight, height, age, gender, activity_level, goal"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""
        rows = execute(
            self.client.table("users")
            .select(_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
        )
        return _parse_user(rows[0]) if rows else None

    def get_users(self, user_ids: list[UUID]) -> list[UserRecord]:
        """Return users for the given ids, preserving the input order."""
        if not user_ids:
            return []
        rows = execute(
            self.client.table("users")
            .select(_COLUMNS)
            .in_("id", [str(user_id) for user_id in user_ids])
        )
        by_id = {user.id: user for user in (_parse_user(row) for row in rows)}
        return [by_id[user_id] for user_id in user_ids if user_id in by_id]

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user with an email, if present."""
        rows = execute(
            self.client.table("users").select(_COLUMNS).eq("email", email).limit(1)
        )
        return _parse_user(rows[0]) if rows else None

    def create_user(self, name: str, email: str) -> UserRecord:
        """Create a new user row and return it."""
        rows = execute(
            self.client.table("users").insert({"name": name, "email": email})
        )
        if not rows:
            raise StoreError("Failed to create user in Supabase")
        return _parse_user(rows[0])

    def create_settings(self, user_id: UUID, timezone: str | None) -> None:
        """Create the default settings row for a user."""
        execute(
            self.client.table("user_settings").insert(
                {"user_id": str(user_id), "timezone": timezone}
            )
        )

    def search_by_name(
        self, query: str, exclude_id: UUID, limit: int
    ) -> list[UserRecord]:
        """Return users whose name contains the query."""
        rows = execute(
            self.client.table("users")
            .select(_COLUMNS)
            .ilike("name", f"%{query}%")
            .neq("id", str(exclude_id))
            .limit(limit)
        )
        return [_parse_user(row) for row in rows]

    def update_profile(self, user_id: UUID, fields: dict[str, object]) -> UserRecord:
        """Update profile columns and return the stored user."""
        payload = {
            key: value for key, value in fields.items() if key in PROFILE_FIELDS
        }
        rows = execute(
            self.client.table("users").update(payload).eq("id", str(user_id))
        )
        if not rows:
            raise StoreError(f"Failed to update user {user_id}")
        return _parse_user(rows[0])

    def delete_user(self, user_id: UUID) -> None:
        """Delete the user row."""
        execute(self.client.table("users").delete().eq("id", str(user_id)))


def _parse_user(row: dict[str, object]) -> UserRecord:
    created_at = row.get("created_at")
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name") or ""),
        email=str(row.get("email") or ""),
        created_at=parse_timestamp(created_at) if created_at else None,
        weight=_optional_float(row.get("weight")),
        height=_optional_float(row.get("height")),
        age=int(row["age"]) if row.get("age") is not None else None,
        gender=row.get("gender"),
        activity_level=row.get("activity_level"),
        goal=row.get("goal"),
    )


def _optional_float(value: object) -> float | None:
    if isinstance(value, int | float):
        return float(value)
    return None
