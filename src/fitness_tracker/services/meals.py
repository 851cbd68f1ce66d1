"""Meal logging service."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from fitness_tracker.domain.errors import NotFound, Unauthorized, ValidationError
from fitness_tracker.domain.events import MealEvent

if TYPE_CHECKING:
    from fitness_tracker.services.records import RecordService


class MealRepository(Protocol):
    """Persistence interface for meal events."""

    def create_meal(
        self, owner_id: UUID, name: str, calories: int, occurred_at: datetime
    ) -> MealEvent:
        """Create a meal event and return it."""

    def get_meal(self, meal_id: UUID) -> MealEvent | None:
        """Return a meal by id."""

    def update_meal(self, meal_id: UUID, fields: dict[str, object]) -> MealEvent:
        """Update meal fields and return the stored event."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal by id."""

    def list_meals(
        self,
        owner_ids: list[UUID],
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[MealEvent]:
        """Return meals for the owners in [start, end), newest first."""

    def latest_meal(self, owner_id: UUID) -> MealEvent | None:
        """Return the most recent meal of a user."""

    def delete_user_meals(self, owner_id: UUID) -> None:
        """Delete every meal owned by a user."""


@dataclass
class MealService:
    """Service for logging and editing meals."""

    repository: MealRepository
    record_service: "RecordService | None" = None

    def log_meal(
        self,
        user_id: UUID,
        name: str,
        calories: int,
        occurred_at: datetime | None = None,
    ) -> MealEvent:
        """Validate and persist a new meal."""
        meal = self.repository.create_meal(
            owner_id=user_id,
            name=validate_name(name),
            calories=validate_calories(calories),
            occurred_at=occurred_at or datetime.now(tz=UTC),
        )
        self._reconcile(user_id)
        return meal

    def list_meals(self, user_id: UUID) -> list[MealEvent]:
        """Return all meals of a user, newest first."""
        return self.repository.list_meals([user_id])

    def update_meal(
        self,
        user_id: UUID,
        meal_id: UUID,
        name: str | None = None,
        calories: int | None = None,
    ) -> MealEvent:
        """Edit a meal owned by the user."""
        self._get_owned(user_id, meal_id)
        fields: dict[str, object] = {}
        if name is not None:
            fields["name"] = validate_name(name)
        if calories is not None:
            fields["calories"] = validate_calories(calories)
        meal = self.repository.update_meal(meal_id, fields)
        self._reconcile(user_id)
        return meal

    def delete_meal(self, user_id: UUID, meal_id: UUID) -> None:
        """Delete a meal owned by the user."""
        self._get_owned(user_id, meal_id)
        self.repository.delete_meal(meal_id)
        self._reconcile(user_id)

    def _get_owned(self, user_id: UUID, meal_id: UUID) -> MealEvent:
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise NotFound(f"Meal {meal_id} not found")
        if meal.owner_id != user_id:
            raise Unauthorized("Meal belongs to another user")
        return meal

    def _reconcile(self, user_id: UUID) -> None:
        if self.record_service is not None:
            self.record_service.reconcile(user_id)


def validate_name(name: str) -> str:
    """Return a trimmed, non-empty event name."""
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Name is required")
    return cleaned


def validate_calories(value: object, *, field: str = "calories") -> int:
    """Return a non-negative integer calorie value."""
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a non-negative integer")
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or value < 0:
        raise ValidationError(f"{field} must be a non-negative integer")
    return value
