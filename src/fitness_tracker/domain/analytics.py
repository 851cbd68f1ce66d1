"""Domain models for analytics and leaderboards."""

from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID


@dataclass(frozen=True)
class DailyValue:
    """Single point of a day-bucketed series."""

    day: date
    value: float


@dataclass(frozen=True)
class BestDay:
    """Day with the highest summed calories burned."""

    day: date
    calories: int


@dataclass(frozen=True)
class AnalyticsSummary:
    """Trailing-window summary of a user's activity."""

    average_daily_calories: int
    total_workouts: int
    workout_consistency: int
    workout_history: list[DailyValue]
    current_streak: int
    best_day: BestDay | None


@dataclass(frozen=True)
class LifetimeStats:
    """All-time counters for a user."""

    total_workouts: int
    total_meals: int
    total_calories_burned: int
    member_since: datetime | None


@dataclass(frozen=True)
class LeaderboardEntry:
    """Computed fitness score for one member of a friend group."""

    user_id: UUID
    name: str
    fit_score: float
