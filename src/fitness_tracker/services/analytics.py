"""Analytics summaries over a user's meal and workout logs."""

from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from datetime import UTC, date, datetime, timedelta
from typing import TypeVar
from uuid import UUID
from zoneinfo import ZoneInfo

from fitness_tracker.domain.analytics import (
    AnalyticsSummary,
    BestDay,
    DailyValue,
    LifetimeStats,
)
from fitness_tracker.domain.events import MealEvent, WorkoutEvent
from fitness_tracker.services.durations import duration_minutes
from fitness_tracker.services.meals import MealRepository
from fitness_tracker.services.streaks import current_streak, distinct_workout_dates
from fitness_tracker.services.user_settings import UserSettingsService
from fitness_tracker.services.users import UserRepository
from fitness_tracker.services.workouts import WorkoutRepository

EventT = TypeVar("EventT", MealEvent, WorkoutEvent)


@dataclass
class AnalyticsService:
    """Service for chart-ready activity summaries in the user's timezone."""

    meal_repository: MealRepository
    workout_repository: WorkoutRepository
    user_repository: UserRepository
    user_settings_service: UserSettingsService

    def summarize(self, user_id: UUID, window_days: int = 7) -> AnalyticsSummary:
        """Return the trailing-window summary for a user."""
        tz = self.user_settings_service.get_zone(user_id)
        now = datetime.now(tz=tz)
        start = (now - timedelta(days=window_days)).astimezone(UTC)
        meals = self.meal_repository.list_meals([user_id], start=start)
        workouts = self.workout_repository.list_workouts([user_id], start=start)
        all_workouts = self.workout_repository.list_workouts([user_id])

        total_calories = sum(meal.calories for meal in meals)
        average = round(total_calories / window_days) if meals and window_days else 0
        return AnalyticsSummary(
            average_daily_calories=average,
            total_workouts=len(workouts),
            workout_consistency=len(distinct_workout_dates(workouts, tz)),
            workout_history=_daily_series(
                workouts, tz, lambda w: duration_minutes(w.duration)
            ),
            current_streak=current_streak(
                distinct_workout_dates(all_workouts, tz), now.date()
            ),
            best_day=_best_burn_day(all_workouts, tz),
        )

    def calorie_history(self, user_id: UUID, window_days: int = 7) -> list[DailyValue]:
        """Return calories consumed per day, oldest first."""
        tz = self.user_settings_service.get_zone(user_id)
        start = datetime.now(tz=UTC) - timedelta(days=window_days)
        meals = self.meal_repository.list_meals([user_id], start=start)
        return _daily_series(meals, tz, lambda meal: meal.calories)

    def lifetime_stats(self, user_id: UUID) -> LifetimeStats:
        """Return all-time totals for a user."""
        workouts = self.workout_repository.list_workouts([user_id])
        meals = self.meal_repository.list_meals([user_id])
        user = self.user_repository.get_user(user_id)
        return LifetimeStats(
            total_workouts=len(workouts),
            total_meals=len(meals),
            total_calories_burned=sum(w.calories_burned or 0 for w in workouts),
            member_since=user.created_at if user else None,
        )


def _daily_series(
    events: Iterable[EventT], tz: ZoneInfo, value: Callable[[EventT], float]
) -> list[DailyValue]:
    totals: dict[date, float] = defaultdict(float)
    for event in events:
        totals[event.occurred_at.astimezone(tz).date()] += value(event)
    return [DailyValue(day=day, value=totals[day]) for day in sorted(totals)]


def _best_burn_day(workouts: Iterable[WorkoutEvent], tz: ZoneInfo) -> BestDay | None:
    totals: dict[date, int] = defaultdict(int)
    for workout in workouts:
        if workout.calories_burned is None:
            continue
        totals[workout.occurred_at.astimezone(tz).date()] += workout.calories_burned
    if not totals:
        return None
    best = min(totals, key=lambda day: (-totals[day], day))
    return BestDay(day=best, calories=totals[best])
