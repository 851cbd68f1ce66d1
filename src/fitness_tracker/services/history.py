"""Combined activity history and friends feed."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from uuid import UUID

from fitness_tracker.domain.events import ActivityItem
from fitness_tracker.services.friends import FriendService
from fitness_tracker.services.meals import MealRepository
from fitness_tracker.services.users import UserRepository
from fitness_tracker.services.workouts import WorkoutRepository

FEED_WINDOW_DAYS = 3


@dataclass
class HistoryService:
    """Merges meals and workouts into time-ordered activity lists."""

    meal_repository: MealRepository
    workout_repository: WorkoutRepository
    user_repository: UserRepository
    friend_service: FriendService

    def get_history(self, user_id: UUID) -> list[ActivityItem]:
        """Return every meal and workout of the user, newest first."""
        return self._collect([user_id], start=None, names={})

    def get_feed(self, user_id: UUID) -> list[ActivityItem]:
        """Return recent activity of the user and their friends, newest first."""
        member_ids = [user_id, *self.friend_service.friend_ids(user_id)]
        members = self.user_repository.get_users(member_ids)
        names = {user.id: user.name for user in members}
        start = datetime.now(tz=UTC) - timedelta(days=FEED_WINDOW_DAYS)
        return self._collect(member_ids, start=start, names=names)

    def _collect(
        self,
        owner_ids: list[UUID],
        start: datetime | None,
        names: dict[UUID, str],
    ) -> list[ActivityItem]:
        items = [
            ActivityItem(kind="meal", event=meal, owner_name=names.get(meal.owner_id))
            for meal in self.meal_repository.list_meals(owner_ids, start=start)
        ]
        items.extend(
            ActivityItem(
                kind="workout", event=workout, owner_name=names.get(workout.owner_id)
            )
            for workout in self.workout_repository.list_workouts(owner_ids, start=start)
        )
        return sorted(items, key=lambda item: item.occurred_at, reverse=True)
