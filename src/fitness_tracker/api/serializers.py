"""JSON serialization of domain objects for API responses."""

from fitness_tracker.domain.analytics import (
    AnalyticsSummary,
    DailyValue,
    LeaderboardEntry,
    LifetimeStats,
)
from fitness_tracker.domain.events import ActivityItem, MealEvent, WorkoutEvent
from fitness_tracker.domain.models import UserRecord
from fitness_tracker.domain.records import Record


def meal(event: MealEvent) -> dict[str, object]:
    return {
        "id": str(event.id),
        "user_id": str(event.owner_id),
        "name": event.name,
        "calories": event.calories,
        "date": event.occurred_at.isoformat(),
    }


def workout(event: WorkoutEvent) -> dict[str, object]:
    return {
        "id": str(event.id),
        "user_id": str(event.owner_id),
        "name": event.name,
        "duration": event.duration,
        "calories_burned": event.calories_burned,
        "date": event.occurred_at.isoformat(),
    }


def activity(item: ActivityItem) -> dict[str, object]:
    """Serialize a history or feed entry with its type tag."""
    if isinstance(item.event, MealEvent):
        payload = meal(item.event)
    else:
        payload = workout(item.event)
    payload["type"] = item.kind
    if item.owner_name is not None:
        payload["user_name"] = item.owner_name
    return payload


def record(entry: Record) -> dict[str, object]:
    return {
        "record_type": entry.record_type.value,
        "value": entry.value,
        "unit": entry.unit,
        "date_achieved": entry.achieved_at.isoformat(),
        "source_meal_id": str(entry.source_meal_id) if entry.source_meal_id else None,
        "source_workout_id": (
            str(entry.source_workout_id) if entry.source_workout_id else None
        ),
    }


def user_summary(user: UserRecord) -> dict[str, object]:
    return {"id": str(user.id), "name": user.name}


def user_profile(user: UserRecord) -> dict[str, object]:
    return {
        "id": str(user.id),
        "name": user.name,
        "email": user.email,
        "created_at": user.created_at.isoformat() if user.created_at else None,
        "weight": user.weight,
        "height": user.height,
        "age": user.age,
        "gender": user.gender,
        "activity_level": user.activity_level,
        "goal": user.goal,
    }


def leaderboard_entry(entry: LeaderboardEntry) -> dict[str, object]:
    return {
        "user_id": str(entry.user_id),
        "name": entry.name,
        "fit_score": entry.fit_score,
    }


def daily_series(points: list[DailyValue], key: str) -> list[dict[str, object]]:
    return [{"date": point.day.isoformat(), key: point.value} for point in points]


def summary(result: AnalyticsSummary) -> dict[str, object]:
    best_day = result.best_day
    return {
        "average_daily_calories": result.average_daily_calories,
        "total_workouts": result.total_workouts,
        "workout_consistency": result.workout_consistency,
        "workout_history": daily_series(result.workout_history, "total_duration"),
        "current_streak": result.current_streak,
        "best_day": (
            {"date": best_day.day.isoformat(), "calories": best_day.calories}
            if best_day
            else None
        ),
    }


def lifetime(stats: LifetimeStats) -> dict[str, object]:
    return {
        "total_workouts": stats.total_workouts,
        "total_meals": stats.total_meals,
        "total_calories_burned": stats.total_calories_burned,
        "member_since": stats.member_since.isoformat() if stats.member_since else None,
    }
