"""Domain models for logged meals and workouts."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

MINUTES_PER_HOUR = 60


@dataclass(frozen=True)
class MealEvent:
    """A meal logged by a user."""

    id: UUID
    owner_id: UUID
    name: str
    calories: int
    occurred_at: datetime


@dataclass(frozen=True)
class WorkoutEvent:
    """A workout logged by a user.

    ``duration`` is free text such as "30 minutes" or "1 hour".
    """

    id: UUID
    owner_id: UUID
    name: str
    duration: str
    occurred_at: datetime
    calories_burned: int | None = None


@dataclass(frozen=True)
class Duration:
    """Structured form of a free-text workout duration."""

    amount: float
    unit: str | None

    @property
    def minutes(self) -> float:
        if self.unit == "hours":
            return self.amount * MINUTES_PER_HOUR
        return self.amount


@dataclass(frozen=True)
class ActivityItem:
    """Meal or workout entry in a history or friends feed."""

    kind: str
    event: MealEvent | WorkoutEvent
    owner_name: str | None = None

    @property
    def occurred_at(self) -> datetime:
        return self.event.occurred_at
