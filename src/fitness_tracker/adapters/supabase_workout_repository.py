"""Supabase repository for workout events."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_support import execute, parse_timestamp
from fitness_tracker.domain.errors import StoreError
from fitness_tracker.domain.events import WorkoutEvent
from fitness_tracker.services.workouts import WorkoutRepository

_COLUMNS = "id, user_id, name, duration, calories_burned, occurred_at"


@dataclass
class SupabaseWorkoutRepository(WorkoutRepository):
    """Supabase implementation for workout events."""

    client: Client

    def create_workout(
        self,
        owner_id: UUID,
        name: str,
        duration: str,
        calories_burned: int | None,
        occurred_at: datetime,
    ) -> WorkoutEvent:
        """Create a workout row and return it."""
        rows = execute(
            self.client.table("workouts").insert(
                {
                    "user_id": str(owner_id),
                    "name": name,
                    "duration": duration,
                    "calories_burned": calories_burned,
                    "occurred_at": occurred_at.isoformat(),
                }
            )
        )
        if not rows:
            raise StoreError("Failed to create workout")
        return _parse_workout(rows[0])

    def get_workout(self, workout_id: UUID) -> WorkoutEvent | None:
        """Return a workout by id."""
        rows = execute(
            self.client.table("workouts")
            .select(_COLUMNS)
            .eq("id", str(workout_id))
            .limit(1)
        )
        return _parse_workout(rows[0]) if rows else None

    def update_workout(
        self, workout_id: UUID, fields: dict[str, object]
    ) -> WorkoutEvent:
        """Update a workout row."""
        if not fields:
            workout = self.get_workout(workout_id)
            if workout is None:
                raise StoreError(f"Workout {workout_id} disappeared")
            return workout
        rows = execute(
            self.client.table("workouts").update(fields).eq("id", str(workout_id))
        )
        if not rows:
            raise StoreError(f"Failed to update workout {workout_id}")
        return _parse_workout(rows[0])

    def delete_workout(self, workout_id: UUID) -> None:
        """Delete a workout row."""
        execute(self.client.table("workouts").delete().eq("id", str(workout_id)))

    def list_workouts(
        self,
        owner_ids: list[UUID],
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[WorkoutEvent]:
        """Return workouts for the owners in the time range, newest first."""
        if not owner_ids:
            return []
        query = (
            self.client.table("workouts")
            .select(_COLUMNS)
            .in_("user_id", [str(owner_id) for owner_id in owner_ids])
        )
        if start is not None:
            query = query.gte("occurred_at", start.isoformat())
        if end is not None:
            query = query.lt("occurred_at", end.isoformat())
        rows = execute(query.order("occurred_at", desc=True))
        return [_parse_workout(row) for row in rows]

    def delete_user_workouts(self, owner_id: UUID) -> None:
        """Delete every workout of a user."""
        execute(self.client.table("workouts").delete().eq("user_id", str(owner_id)))


def _parse_workout(row: dict[str, object]) -> WorkoutEvent:
    burned = row.get("calories_burned")
    return WorkoutEvent(
        id=UUID(str(row["id"])),
        owner_id=UUID(str(row["user_id"])),
        name=str(row.get("name") or ""),
        duration=str(row.get("duration") or ""),
        calories_burned=int(burned) if burned is not None else None,
        occurred_at=parse_timestamp(row.get("occurred_at")),
    )
