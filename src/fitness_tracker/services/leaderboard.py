"""Friends leaderboard scoring."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from fitness_tracker.domain.analytics import LeaderboardEntry
from fitness_tracker.domain.errors import NotFound, OracleUnavailable
from fitness_tracker.services.durations import duration_minutes
from fitness_tracker.services.friends import FriendService
from fitness_tracker.services.healthiness import HEALTHY, MealHealthClassifier
from fitness_tracker.services.meals import MealRepository
from fitness_tracker.services.users import UserRepository
from fitness_tracker.services.workouts import WorkoutRepository

POINTS_PER_WORKOUT_MINUTE = 10
POINTS_PER_HEALTHY_MEAL = 50

_logger = logging.getLogger(__name__)


@dataclass
class LeaderboardService:
    """Ranks a user and their friends by fit score over a trailing window."""

    user_repository: UserRepository
    friend_service: FriendService
    meal_repository: MealRepository
    workout_repository: WorkoutRepository
    classifier: MealHealthClassifier
    default_window_days: int = 7

    async def compute(
        self, user_id: UUID, window_days: int | None = None
    ) -> list[LeaderboardEntry]:
        """Return the group ordered by fit score, highest first."""
        user = self.user_repository.get_user(user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        friend_ids = self.friend_service.friend_ids(user_id)
        friends = self.user_repository.get_users(friend_ids)
        members = [user, *(friend for friend in friends if friend.id != user_id)]
        member_ids = [member.id for member in members]
        days = self.default_window_days if window_days is None else window_days
        start = datetime.now(tz=UTC) - timedelta(days=days)

        scores = {member_id: 0.0 for member_id in member_ids}
        for workout in self.workout_repository.list_workouts(member_ids, start=start):
            minutes = duration_minutes(workout.duration)
            if minutes > 0 and workout.owner_id in scores:
                scores[workout.owner_id] += minutes * POINTS_PER_WORKOUT_MINUTE

        meals = self.meal_repository.list_meals(member_ids, start=start)
        labels = await self._classify(sorted({meal.name for meal in meals}))
        for meal in meals:
            if labels.get(meal.name) == HEALTHY and meal.owner_id in scores:
                scores[meal.owner_id] += POINTS_PER_HEALTHY_MEAL

        entries = [
            LeaderboardEntry(user_id=m.id, name=m.name, fit_score=scores[m.id])
            for m in members
        ]
        return sorted(entries, key=lambda entry: entry.fit_score, reverse=True)

    async def _classify(self, names: list[str]) -> dict[str, str]:
        try:
            return await self.classifier.classify(names)
        except OracleUnavailable as exc:
            _logger.warning(
                "Meal classification unavailable, scoring workouts only: %s", exc
            )
            return {}
