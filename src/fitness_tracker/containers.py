"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fitness_tracker.adapters.gemini_client import HttpxGeminiClient
from fitness_tracker.adapters.openai_text_client import OpenAITextClient
from fitness_tracker.adapters.supabase_friend_repository import (
    SupabaseFriendRepository,
)
from fitness_tracker.adapters.supabase_meal_repository import SupabaseMealRepository
from fitness_tracker.adapters.supabase_record_repository import (
    SupabaseRecordRepository,
)
from fitness_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from fitness_tracker.adapters.supabase_user_settings_repository import (
    SupabaseUserSettingsRepository,
)
from fitness_tracker.adapters.supabase_workout_repository import (
    SupabaseWorkoutRepository,
)
from fitness_tracker.config import Settings, resolve_oracle_provider
from fitness_tracker.services.analytics import AnalyticsService
from fitness_tracker.services.friends import FriendService
from fitness_tracker.services.healthiness import MealHealthClassifier
from fitness_tracker.services.history import HistoryService
from fitness_tracker.services.leaderboard import LeaderboardService
from fitness_tracker.services.meals import MealService
from fitness_tracker.services.oracle import (
    DisabledCompletionClient,
    OracleService,
    TextCompletionClient,
)
from fitness_tracker.services.records import RecordService
from fitness_tracker.services.transfer import TransferService
from fitness_tracker.services.user_settings import UserSettingsService
from fitness_tracker.services.users import AccountService, UserService
from fitness_tracker.services.workouts import WorkoutService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    user_settings_service: UserSettingsService
    account_service: AccountService
    meal_service: MealService
    workout_service: WorkoutService
    record_service: RecordService
    friend_service: FriendService
    leaderboard_service: LeaderboardService
    analytics_service: AnalyticsService
    history_service: HistoryService
    transfer_service: TransferService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    user_settings_repository = SupabaseUserSettingsRepository(supabase_client)
    meal_repository = SupabaseMealRepository(supabase_client)
    workout_repository = SupabaseWorkoutRepository(supabase_client)
    record_repository = SupabaseRecordRepository(supabase_client)
    friend_repository = SupabaseFriendRepository(supabase_client)

    completion_client, close_client = _build_completion_client(resolved_settings)
    oracle = OracleService(
        client=completion_client,
        timeout_seconds=resolved_settings.oracle_timeout_seconds,
    )

    user_settings_service = UserSettingsService(
        user_settings_repository,
        default_timezone=resolved_settings.default_timezone,
    )
    record_service = RecordService(
        meal_repository=meal_repository,
        workout_repository=workout_repository,
        repository=record_repository,
        user_settings_service=user_settings_service,
    )
    friend_service = FriendService(
        repository=friend_repository, user_repository=user_repository
    )

    async def close_resources() -> None:
        if close_client is not None:
            await close_client()

    return AppContainer(
        settings=resolved_settings,
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
            default_window_days=resolved_settings.leaderboard_window_days,
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


def _build_completion_client(
    settings: Settings,
) -> tuple[TextCompletionClient, Callable[[], Awaitable[None]] | None]:
    provider = resolve_oracle_provider(settings)
    if provider == "gemini" and settings.gemini_api_key:
        gemini = HttpxGeminiClient.create(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            base_url=settings.gemini_base_url,
            timeout=settings.oracle_timeout_seconds,
        )
        return gemini, gemini.close
    if provider == "openai" and settings.openai_api_key:
        openai_client = OpenAITextClient.create(
            api_key=settings.openai_api_key, model=settings.openai_model
        )
        return openai_client, openai_client.close
    return DisabledCompletionClient(), None
