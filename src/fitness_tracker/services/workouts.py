"""Workout logging service."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from fitness_tracker.domain.errors import NotFound, Unauthorized, ValidationError
from fitness_tracker.domain.events import WorkoutEvent
from fitness_tracker.services.meals import validate_calories, validate_name

if TYPE_CHECKING:
    from fitness_tracker.services.records import RecordService


class WorkoutRepository(Protocol):
    """Persistence interface for workout events."""

    def create_workout(
        self,
        owner_id: UUID,
        name: str,
        duration: str,
        calories_burned: int | None,
        occurred_at: datetime,
    ) -> WorkoutEvent:
        """Create a workout event and return it."""

    def get_workout(self, workout_id: UUID) -> WorkoutEvent | None:
        """Return a workout by id."""

    def update_workout(
        self, workout_id: UUID, fields: dict[str, object]
    ) -> WorkoutEvent:
        """Update workout fields and return the stored event."""

    def delete_workout(self, workout_id: UUID) -> None:
        """Delete a workout by id."""

    def list_workouts(
        self,
        owner_ids: list[UUID],
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[WorkoutEvent]:
        """Return workouts for the owners in [start, end), newest first."""

    def delete_user_workouts(self, owner_id: UUID) -> None:
        """Delete every workout owned by a user."""


@dataclass
class WorkoutService:
    """Service for logging and editing workouts."""

    repository: WorkoutRepository
    record_service: "RecordService | None" = None

    def log_workout(
        self,
        user_id: UUID,
        name: str,
        duration: str,
        calories_burned: int | None = None,
        occurred_at: datetime | None = None,
    ) -> WorkoutEvent:
        """Validate and persist a new workout."""
        workout = self.repository.create_workout(
            owner_id=user_id,
            name=validate_name(name),
            duration=_validate_duration(duration),
            calories_burned=_optional_calories(calories_burned),
            occurred_at=occurred_at or datetime.now(tz=UTC),
        )
        self._reconcile(user_id)
        return workout

    def list_workouts(self, user_id: UUID) -> list[WorkoutEvent]:
        """Return all workouts of a user, newest first."""
        return self.repository.list_workouts([user_id])

    def update_workout(
        self,
        user_id: UUID,
        workout_id: UUID,
        name: str | None = None,
        duration: str | None = None,
        calories_burned: int | None = None,
    ) -> WorkoutEvent:
        """Edit a workout owned by the user."""
        self._get_owned(user_id, workout_id)
        fields: dict[str, object] = {}
        if name is not None:
            fields["name"] = validate_name(name)
        if duration is not None:
            fields["duration"] = _validate_duration(duration)
        if calories_burned is not None:
            fields["calories_burned"] = _optional_calories(calories_burned)
        workout = self.repository.update_workout(workout_id, fields)
        self._reconcile(user_id)
        return workout

    def delete_workout(self, user_id: UUID, workout_id: UUID) -> None:
        """Delete a workout owned by the user."""
        self._get_owned(user_id, workout_id)
        self.repository.delete_workout(workout_id)
        self._reconcile(user_id)

    def _get_owned(self, user_id: UUID, workout_id: UUID) -> WorkoutEvent:
        workout = self.repository.get_workout(workout_id)
        if workout is None:
            raise NotFound(f"Workout {workout_id} not found")
        if workout.owner_id != user_id:
            raise Unauthorized("Workout belongs to another user")
        return workout

    def _reconcile(self, user_id: UUID) -> None:
        if self.record_service is not None:
            self.record_service.reconcile(user_id)


def _validate_duration(duration: str) -> str:
    cleaned = (duration or "").strip()
    if not cleaned:
        raise ValidationError("Duration is required")
    return cleaned


def _optional_calories(value: int | None) -> int | None:
    if value is None:
        return None
    return validate_calories(value, field="calories_burned")
