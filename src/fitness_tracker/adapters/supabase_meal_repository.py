"""Supabase repository for meal events."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_support import execute, parse_timestamp
from fitness_tracker.domain.errors import StoreError
from fitness_tracker.domain.events import MealEvent
from fitness_tracker.services.meals import MealRepository

_COLUMNS = "id, user_id, name, calories, occurred_at"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meal events."""

    client: Client

    def create_meal(
        self, owner_id: UUID, name: str, calories: int, occurred_at: datetime
    ) -> MealEvent:
        """Create a meal row and return it."""
        rows = execute(
            self.client.table("meals").insert(
                {
                    "user_id": str(owner_id),
                    "name": name,
                    "calories": calories,
                    "occurred_at": occurred_at.isoformat(),
                }
            )
        )
        if not rows:
            raise StoreError("Failed to create meal")
        return _parse_meal(rows[0])

    def get_meal(self, meal_id: UUID) -> MealEvent | None:
        """Return a meal by id."""
        rows = execute(
            self.client.table("meals").select(_COLUMNS).eq("id", str(meal_id)).limit(1)
        )
        return _parse_meal(rows[0]) if rows else None

    def update_meal(self, meal_id: UUID, fields: dict[str, object]) -> MealEvent:
        """Update a meal row."""
        if not fields:
            meal = self.get_meal(meal_id)
            if meal is None:
                raise StoreError(f"Meal {meal_id} disappeared")
            return meal
        rows = execute(self.client.table("meals").update(fields).eq("id", str(meal_id)))
        if not rows:
            raise StoreError(f"Failed to update meal {meal_id}")
        return _parse_meal(rows[0])

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal row."""
        execute(self.client.table("meals").delete().eq("id", str(meal_id)))

    def list_meals(
        self,
        owner_ids: list[UUID],
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[MealEvent]:
        """Return meals for the owners in the time range, newest first."""
        if not owner_ids:
            return []
        query = (
            self.client.table("meals")
            .select(_COLUMNS)
            .in_("user_id", [str(owner_id) for owner_id in owner_ids])
        )
        if start is not None:
            query = query.gte("occurred_at", start.isoformat())
        if end is not None:
            query = query.lt("occurred_at", end.isoformat())
        rows = execute(query.order("occurred_at", desc=True))
        return [_parse_meal(row) for row in rows]

    def latest_meal(self, owner_id: UUID) -> MealEvent | None:
        """Return the most recent meal of a user."""
        rows = execute(
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("user_id", str(owner_id))
            .order("occurred_at", desc=True)
            .limit(1)
        )
        return _parse_meal(rows[0]) if rows else None

    def delete_user_meals(self, owner_id: UUID) -> None:
        """Delete every meal of a user."""
        execute(self.client.table("meals").delete().eq("user_id", str(owner_id)))


def _parse_meal(row: dict[str, object]) -> MealEvent:
    return MealEvent(
        id=UUID(str(row["id"])),
        owner_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        calories=int(row.get("calories") or 0),
        occurred_at=parse_timestamp(row.get("occurred_at")),
    )
