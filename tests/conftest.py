"""Shared test fixtures."""

import threading
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.errors import OracleUnavailable, ValidationError
from fitness_tracker.domain.events import MealEvent, WorkoutEvent
from fitness_tracker.domain.friends import FriendEdge, FriendStatus
from fitness_tracker.domain.models import UserRecord
from fitness_tracker.domain.records import Record, RecordCandidate
from fitness_tracker.services.analytics import AnalyticsService
from fitness_tracker.services.friends import FriendRepository, FriendService
from fitness_tracker.services.healthiness import MealHealthClassifier
from fitness_tracker.services.history import HistoryService
from fitness_tracker.services.leaderboard import LeaderboardService
from fitness_tracker.services.meals import MealRepository, MealService
from fitness_tracker.services.oracle import OracleService, TextCompletionClient
from fitness_tracker.services.records import RecordRepository, RecordService
from fitness_tracker.services.transfer import TransferService
from fitness_tracker.services.user_settings import (
    UserSettingsRepository,
    UserSettingsService,
)
from fitness_tracker.services.users import (
    AccountService,
    UserRepository,
    UserService,
)
from fitness_tracker.services.workouts import WorkoutRepository, WorkoutService


def _in_window(
    occurred_at: datetime, start: datetime | None, end: datetime | None
) -> bool:
    if start is not None and occurred_at < start:
        return False
    return end is None or occurred_at < end


@dataclass
class InMemoryUserRepository(UserRepository):
    """In-memory user repository for tests."""

    users: dict[UUID, UserRecord] = field(default_factory=dict)
    settings: set[UUID] = field(default_factory=set)

    def add_user(self, name: str, created_at: datetime | None = None) -> UserRecord:
        return self.create_user(name, f"{name.lower()}@example.com", created_at)

    def get_user(self, user_id: UUID) -> UserRecord | None:
        return self.users.get(user_id)

    def get_users(self, user_ids: list[UUID]) -> list[UserRecord]:
        return [self.users[user_id] for user_id in user_ids if user_id in self.users]

    def get_by_email(self, email: str) -> UserRecord | None:
        return next((u for u in self.users.values() if u.email == email), None)

    def create_user(
        self, name: str, email: str, created_at: datetime | None = None
    ) -> UserRecord:
        user = UserRecord(
            id=uuid4(),
            name=name,
            email=email,
            created_at=created_at or datetime.now(tz=UTC),
        )
        self.users[user.id] = user
        return user

    def create_settings(self, user_id: UUID, timezone: str | None) -> None:
        self.settings.add(user_id)

    def search_by_name(
        self, query: str, exclude_id: UUID, limit: int
    ) -> list[UserRecord]:
        matches = [
            user
            for user in self.users.values()
            if query.lower() in user.name.lower() and user.id != exclude_id
        ]
        return matches[:limit]

    def update_profile(self, user_id: UUID, fields: dict[str, object]) -> UserRecord:
        user = replace(self.users[user_id], **fields)
        self.users[user_id] = user
        return user

    def delete_user(self, user_id: UUID) -> None:
        self.users.pop(user_id, None)


@dataclass
class InMemoryUserSettingsRepository(UserSettingsRepository):
    """In-memory user settings repository for tests."""

    timezones: dict[UUID, str] = field(default_factory=dict)

    def get_timezone(self, user_id: UUID) -> str | None:
        return self.timezones.get(user_id)

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        self.timezones[user_id] = timezone


@dataclass
class InMemoryMealRepository(MealRepository):
    """In-memory meal repository for tests."""

    meals: dict[UUID, MealEvent] = field(default_factory=dict)

    def create_meal(
        self, owner_id: UUID, name: str, calories: int, occurred_at: datetime
    ) -> MealEvent:
        meal = MealEvent(
            id=uuid4(),
            owner_id=owner_id,
            name=name,
            calories=calories,
            occurred_at=occurred_at,
        )
        self.meals[meal.id] = meal
        return meal

    def get_meal(self, meal_id: UUID) -> MealEvent | None:
        return self.meals.get(meal_id)

    def update_meal(self, meal_id: UUID, fields: dict[str, object]) -> MealEvent:
        meal = replace(self.meals[meal_id], **fields)
        self.meals[meal_id] = meal
        return meal

    def delete_meal(self, meal_id: UUID) -> None:
        self.meals.pop(meal_id, None)

    def list_meals(
        self,
        owner_ids: list[UUID],
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[MealEvent]:
        matches = [
            meal
            for meal in self.meals.values()
            if meal.owner_id in owner_ids and _in_window(meal.occurred_at, start, end)
        ]
        return sorted(matches, key=lambda meal: meal.occurred_at, reverse=True)

    def latest_meal(self, owner_id: UUID) -> MealEvent | None:
        meals = self.list_meals([owner_id])
        return meals[0] if meals else None

    def delete_user_meals(self, owner_id: UUID) -> None:
        for meal in self.list_meals([owner_id]):
            del self.meals[meal.id]


@dataclass
class InMemoryWorkoutRepository(WorkoutRepository):
    """In-memory workout repository for tests."""

    workouts: dict[UUID, WorkoutEvent] = field(default_factory=dict)

    def create_workout(
        self,
        owner_id: UUID,
        name: str,
        duration: str,
        calories_burned: int | None,
        occurred_at: datetime,
    ) -> WorkoutEvent:
        workout = WorkoutEvent(
            id=uuid4(),
            owner_id=owner_id,
            name=name,
            duration=duration,
            occurred_at=occurred_at,
            calories_burned=calories_burned,
        )
        self.workouts[workout.id] = workout
        return workout

    def get_workout(self, workout_id: UUID) -> WorkoutEvent | None:
        return self.workouts.get(workout_id)

    def update_workout(
        self, workout_id: UUID, fields: dict[str, object]
    ) -> WorkoutEvent:
        workout = replace(self.workouts[workout_id], **fields)
        self.workouts[workout_id] = workout
        return workout

    def delete_workout(self, workout_id: UUID) -> None:
        self.workouts.pop(workout_id, None)

    def list_workouts(
        self,
        owner_ids: list[UUID],
        start: datetime | None = None,
        end: datetime | None = None,
    ) -> list[WorkoutEvent]:
        matches = [
            workout
            for workout in self.workouts.values()
            if workout.owner_id in owner_ids
            and _in_window(workout.occurred_at, start, end)
        ]
        return sorted(matches, key=lambda workout: workout.occurred_at, reverse=True)

    def delete_user_workouts(self, owner_id: UUID) -> None:
        for workout in self.list_workouts([owner_id]):
            del self.workouts[workout.id]


@dataclass
class InMemoryRecordRepository(RecordRepository):
    """In-memory record repository with an atomic compare-and-set."""

    records: dict[tuple[UUID, str], Record] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def list_records(self, owner_id: UUID) -> list[Record]:
        return [
            record
            for (record_owner, _), record in sorted(self.records.items())
            if record_owner == owner_id
        ]

    def upsert_if_greater(
        self, owner_id: UUID, candidate: RecordCandidate, achieved_at: datetime
    ) -> Record | None:
        key = (owner_id, candidate.record_type.value)
        with self._lock:
            current = self.records.get(key)
            if current is not None and current.value >= candidate.value:
                return None
            record = Record(
                owner_id=owner_id,
                record_type=candidate.record_type,
                value=candidate.value,
                unit=candidate.record_type.unit,
                achieved_at=achieved_at,
                source_meal_id=candidate.source_meal_id,
                source_workout_id=candidate.source_workout_id,
            )
            self.records[key] = record
            return record

    def delete_user_records(self, owner_id: UUID) -> None:
        for key in [key for key in self.records if key[0] == owner_id]:
            del self.records[key]


@dataclass
class InMemoryFriendRepository(FriendRepository):
    """In-memory friends relation with one edge per unordered pair."""

    edges: list[FriendEdge] = field(default_factory=list)

    def get_edge(self, user_a: UUID, user_b: UUID) -> FriendEdge | None:
        return next(
            (
                edge
                for edge in self.edges
                if edge.involves(user_a) and edge.involves(user_b)
            ),
            None,
        )

    def create_request(self, requester_id: UUID, addressee_id: UUID) -> FriendEdge:
        if self.get_edge(requester_id, addressee_id) is not None:
            raise ValidationError("Friend relation already exists")
        edge = FriendEdge(
            requester_id=requester_id,
            addressee_id=addressee_id,
            status=FriendStatus.PENDING,
            created_at=datetime.now(tz=UTC),
        )
        self.edges.append(edge)
        return edge

    def accept_request(
        self, requester_id: UUID, addressee_id: UUID
    ) -> FriendEdge | None:
        for index, edge in enumerate(self.edges):
            if (
                edge.requester_id == requester_id
                and edge.addressee_id == addressee_id
                and edge.status == FriendStatus.PENDING
            ):
                accepted = replace(edge, status=FriendStatus.ACCEPTED)
                self.edges[index] = accepted
                return accepted
        return None

    def list_edges(
        self, user_id: UUID, status: FriendStatus | None = None
    ) -> list[FriendEdge]:
        return [
            edge
            for edge in self.edges
            if edge.involves(user_id) and (status is None or edge.status == status)
        ]

    def delete_user_edges(self, user_id: UUID) -> None:
        self.edges = [edge for edge in self.edges if not edge.involves(user_id)]

    def befriend(self, user_a: UUID, user_b: UUID) -> None:
        self.edges.append(
            FriendEdge(
                requester_id=user_a,
                addressee_id=user_b,
                status=FriendStatus.ACCEPTED,
            )
        )


@dataclass
class FakeCompletionClient(TextCompletionClient):
    """Fake completion client that replays a fixed reply."""

    reply: str = "{}"
    error: Exception | None = None
    prompts: list[str] = field(default_factory=list)

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


def unavailable_client() -> FakeCompletionClient:
    return FakeCompletionClient(error=OracleUnavailable("quota exceeded"))


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="service-key",
        api_token="api-token",
    )


@pytest.fixture
def user_repository() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture
def settings_repository() -> InMemoryUserSettingsRepository:
    return InMemoryUserSettingsRepository()


@pytest.fixture
def meal_repository() -> InMemoryMealRepository:
    return InMemoryMealRepository()


@pytest.fixture
def workout_repository() -> InMemoryWorkoutRepository:
    return InMemoryWorkoutRepository()


@pytest.fixture
def record_repository() -> InMemoryRecordRepository:
    return InMemoryRecordRepository()


@pytest.fixture
def friend_repository() -> InMemoryFriendRepository:
    return InMemoryFriendRepository()


@pytest.fixture
def completion_client() -> FakeCompletionClient:
    return FakeCompletionClient()


@pytest.fixture
def user_settings_service(
    settings_repository: InMemoryUserSettingsRepository,
) -> UserSettingsService:
    return UserSettingsService(settings_repository)


@pytest.fixture
def record_service(
    meal_repository: InMemoryMealRepository,
    workout_repository: InMemoryWorkoutRepository,
    record_repository: InMemoryRecordRepository,
    user_settings_service: UserSettingsService,
) -> RecordService:
    return RecordService(
        meal_repository=meal_repository,
        workout_repository=workout_repository,
        repository=record_repository,
        user_settings_service=user_settings_service,
    )


@pytest.fixture
def friend_service(
    friend_repository: InMemoryFriendRepository,
    user_repository: InMemoryUserRepository,
) -> FriendService:
    return FriendService(repository=friend_repository, user_repository=user_repository)


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    user_repository: InMemoryUserRepository,
    meal_repository: InMemoryMealRepository,
    workout_repository: InMemoryWorkoutRepository,
    record_repository: InMemoryRecordRepository,
    friend_repository: InMemoryFriendRepository,
    completion_client: FakeCompletionClient,
    user_settings_service: UserSettingsService,
    record_service: RecordService,
    friend_service: FriendService,
) -> AppContainer:
    oracle = OracleService(client=completion_client, timeout_seconds=1.0)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        user_service=UserService(user_repository),
        user_settings_service=user_settings_service,
        account_service=AccountService(
            users=user_repository,
            meals=meal_repository,
            workouts=workout_repository,
            records=record_repository,
            friends=friend_repository,
        ),
        meal_service=MealService(meal_repository, record_service=record_service),
        workout_service=WorkoutService(
            workout_repository, record_service=record_service
        ),
        record_service=record_service,
        friend_service=friend_service,
        leaderboard_service=LeaderboardService(
            user_repository=user_repository,
            friend_service=friend_service,
            meal_repository=meal_repository,
            workout_repository=workout_repository,
            classifier=MealHealthClassifier(oracle),
        ),
        analytics_service=AnalyticsService(
            meal_repository=meal_repository,
            workout_repository=workout_repository,
            user_repository=user_repository,
            user_settings_service=user_settings_service,
        ),
        history_service=HistoryService(
            meal_repository=meal_repository,
            workout_repository=workout_repository,
            user_repository=user_repository,
            friend_service=friend_service,
        ),
        transfer_service=TransferService(
            meal_repository=meal_repository, workout_repository=workout_repository
        ),
        close_resources=close_resources,
    )
