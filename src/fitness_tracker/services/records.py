"""Personal-best record tracking."""

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.events import MealEvent, WorkoutEvent
from fitness_tracker.domain.records import Record, RecordCandidate, RecordType
from fitness_tracker.services.durations import duration_minutes, leading_count
from fitness_tracker.services.meals import MealRepository
from fitness_tracker.services.streaks import distinct_workout_dates, longest_streak
from fitness_tracker.services.user_settings import UserSettingsService
from fitness_tracker.services.workouts import WorkoutRepository

_logger = logging.getLogger(__name__)

# Case-insensitive name fragments whose leading duration token counts reps.
REP_EXERCISES: dict[RecordType, str] = {
    RecordType.MOST_REPS_BENCH_PRESS: "bench press",
}


class RecordRepository(Protocol):
    """Persistence interface for personal-best records."""

    def list_records(self, owner_id: UUID) -> list[Record]:
        """Return all records for a user."""

    def upsert_if_greater(
        self, owner_id: UUID, candidate: RecordCandidate, achieved_at: datetime
    ) -> Record | None:
        """Atomically store the candidate if it beats the current value.

        Returns the stored record, or None when the existing value is equal
        or higher.
        """

    def delete_user_records(self, owner_id: UUID) -> None:
        """Delete every record owned by a user."""


@dataclass(frozen=True)
class RecordSnapshot:
    """Events a reconciliation pass reads from."""

    workouts: list[WorkoutEvent]
    latest_meal: MealEvent | None
    todays_workouts: list[WorkoutEvent]
    todays_meals: list[MealEvent]
    workout_dates: list[date]

    @property
    def latest_workout(self) -> WorkoutEvent | None:
        return self.workouts[0] if self.workouts else None


CandidateFn = Callable[[RecordSnapshot], RecordCandidate | None]


def _longest_workout(snapshot: RecordSnapshot) -> RecordCandidate | None:
    workout = snapshot.latest_workout
    if workout is None:
        return None
    return RecordCandidate(
        RecordType.LONGEST_WORKOUT,
        duration_minutes(workout.duration),
        source_workout_id=workout.id,
    )


def _most_reps(record_type: RecordType) -> CandidateFn:
    pattern = REP_EXERCISES[record_type]

    def compute(snapshot: RecordSnapshot) -> RecordCandidate | None:
        workout = snapshot.latest_workout
        if workout is None or pattern not in workout.name.lower():
            return None
        reps = leading_count(workout.duration)
        if reps is None:
            return None
        return RecordCandidate(record_type, reps, source_workout_id=workout.id)

    return compute


def _highest_calorie_meal(snapshot: RecordSnapshot) -> RecordCandidate | None:
    meal = snapshot.latest_meal
    if meal is None:
        return None
    return RecordCandidate(
        RecordType.HIGHEST_CALORIE_MEAL, meal.calories, source_meal_id=meal.id
    )


def _most_calories_burned_day(snapshot: RecordSnapshot) -> RecordCandidate | None:
    if not snapshot.todays_workouts:
        return None
    burned = sum(w.calories_burned or 0 for w in snapshot.todays_workouts)
    return RecordCandidate(RecordType.MOST_CALORIES_BURNED_DAY, burned)


def _most_workouts_in_a_day(snapshot: RecordSnapshot) -> RecordCandidate | None:
    if not snapshot.todays_workouts:
        return None
    return RecordCandidate(
        RecordType.MOST_WORKOUTS_IN_A_DAY, len(snapshot.todays_workouts)
    )


def _highest_calorie_day(snapshot: RecordSnapshot) -> RecordCandidate | None:
    if not snapshot.todays_meals:
        return None
    consumed = sum(meal.calories or 0 for meal in snapshot.todays_meals)
    return RecordCandidate(RecordType.HIGHEST_CALORIE_DAY, consumed)


def _longest_workout_streak(snapshot: RecordSnapshot) -> RecordCandidate | None:
    if not snapshot.workout_dates:
        return None
    return RecordCandidate(
        RecordType.LONGEST_WORKOUT_STREAK, longest_streak(snapshot.workout_dates)
    )


RECORD_CANDIDATES: dict[RecordType, CandidateFn] = {
    RecordType.LONGEST_WORKOUT: _longest_workout,
    RecordType.MOST_REPS_BENCH_PRESS: _most_reps(RecordType.MOST_REPS_BENCH_PRESS),
    RecordType.HIGHEST_CALORIE_MEAL: _highest_calorie_meal,
    RecordType.MOST_CALORIES_BURNED_DAY: _most_calories_burned_day,
    RecordType.MOST_WORKOUTS_IN_A_DAY: _most_workouts_in_a_day,
    RecordType.HIGHEST_CALORIE_DAY: _highest_calorie_day,
    RecordType.LONGEST_WORKOUT_STREAK: _longest_workout_streak,
}


def is_eligible(candidate: RecordCandidate) -> bool:
    """Return True when a candidate value may be stored at all."""
    value = candidate.value
    if isinstance(value, bool) or not isinstance(value, int | float):
        return False
    return math.isfinite(value) and value > 0


@dataclass
class RecordService:
    """Recomputes personal-best records from a user's event history."""

    meal_repository: MealRepository
    workout_repository: WorkoutRepository
    repository: RecordRepository
    user_settings_service: UserSettingsService

    def reconcile(self, user_id: UUID) -> list[Record]:
        """Re-evaluate every record type and return the ones that improved."""
        snapshot = self.build_snapshot(user_id)
        achieved_at = datetime.now(tz=UTC)
        improved: list[Record] = []
        for record_type, compute in RECORD_CANDIDATES.items():
            candidate = compute(snapshot)
            if candidate is None or not is_eligible(candidate):
                continue
            stored = self.repository.upsert_if_greater(
                user_id, candidate, achieved_at
            )
            if stored is not None:
                _logger.info(
                    "New record: user=%s type=%s value=%s",
                    user_id,
                    record_type.value,
                    stored.value,
                )
                improved.append(stored)
        return improved

    def list_records(self, user_id: UUID) -> list[Record]:
        """Return the stored records for a user."""
        return self.repository.list_records(user_id)

    def build_snapshot(self, user_id: UUID) -> RecordSnapshot:
        """Load the events a reconciliation pass needs."""
        tz = self.user_settings_service.get_zone(user_id)
        start = datetime.now(tz=tz).replace(hour=0, minute=0, second=0, microsecond=0)
        end = start + timedelta(days=1)
        workouts = self.workout_repository.list_workouts([user_id])
        todays_workouts = [w for w in workouts if start <= w.occurred_at < end]
        todays_meals = self.meal_repository.list_meals(
            [user_id], start=start.astimezone(UTC), end=end.astimezone(UTC)
        )
        return RecordSnapshot(
            workouts=workouts,
            latest_meal=self.meal_repository.latest_meal(user_id),
            todays_workouts=todays_workouts,
            todays_meals=todays_meals,
            workout_dates=distinct_workout_dates(workouts, tz),
        )
