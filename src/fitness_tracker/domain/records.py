"""Domain models for personal-best records."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class RecordType(str, Enum):
    """Catalogue of tracked personal bests."""

    LONGEST_WORKOUT = "longest_workout"
    MOST_REPS_BENCH_PRESS = "most_reps_bench_press"
    HIGHEST_CALORIE_MEAL = "highest_calorie_meal"
    MOST_CALORIES_BURNED_DAY = "most_calories_burned_day"
    MOST_WORKOUTS_IN_A_DAY = "most_workouts_in_a_day"
    HIGHEST_CALORIE_DAY = "highest_calorie_day"
    LONGEST_WORKOUT_STREAK = "longest_workout_streak"

    @property
    def unit(self) -> str:
        return _UNITS[self]


_UNITS = {
    RecordType.LONGEST_WORKOUT: "min",
    RecordType.MOST_REPS_BENCH_PRESS: "reps",
    RecordType.HIGHEST_CALORIE_MEAL: "kcal",
    RecordType.MOST_CALORIES_BURNED_DAY: "kcal",
    RecordType.MOST_WORKOUTS_IN_A_DAY: "workouts",
    RecordType.HIGHEST_CALORIE_DAY: "kcal",
    RecordType.LONGEST_WORKOUT_STREAK: "days",
}


@dataclass(frozen=True)
class RecordCandidate:
    """Value proposed for a record from the current event snapshot."""

    record_type: RecordType
    value: float
    source_meal_id: UUID | None = None
    source_workout_id: UUID | None = None


@dataclass(frozen=True)
class Record:
    """Persisted personal best for one (user, record type) pair."""

    owner_id: UUID
    record_type: RecordType
    value: float
    unit: str
    achieved_at: datetime
    source_meal_id: UUID | None = None
    source_workout_id: UUID | None = None
