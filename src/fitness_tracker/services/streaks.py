"""Workout streak calculations."""

from collections.abc import Iterable
from datetime import date, timedelta
from zoneinfo import ZoneInfo

from fitness_tracker.domain.events import WorkoutEvent

_ONE_DAY = timedelta(days=1)


def distinct_workout_dates(
    workouts: Iterable[WorkoutEvent], tz: ZoneInfo
) -> list[date]:
    """Return the distinct local dates with a workout, newest first."""
    days = {workout.occurred_at.astimezone(tz).date() for workout in workouts}
    return sorted(days, reverse=True)


def current_streak(dates: list[date], today: date) -> int:
    """Return the consecutive-day streak ending today or yesterday.

    ``dates`` must be distinct and sorted newest first.
    """
    if not dates or dates[0] < today - _ONE_DAY:
        return 0
    streak = 1
    for newer, older in zip(dates, dates[1:], strict=False):
        if newer - older != _ONE_DAY:
            break
        streak += 1
    return streak


def longest_streak(dates: list[date]) -> int:
    """Return the longest consecutive-day streak across all dates.

    ``dates`` must be distinct and sorted newest first.
    """
    if not dates:
        return 0
    longest = 1
    run = 1
    for newer, older in zip(dates, dates[1:], strict=False):
        if newer - older == _ONE_DAY:
            run += 1
            longest = max(longest, run)
        else:
            run = 1
    return longest
