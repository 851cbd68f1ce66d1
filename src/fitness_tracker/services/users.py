"""User-related business logic."""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from fitness_tracker.domain.errors import NotFound, ValidationError
from fitness_tracker.domain.models import UserRecord

if TYPE_CHECKING:
    from fitness_tracker.services.friends import FriendRepository
    from fitness_tracker.services.meals import MealRepository
    from fitness_tracker.services.records import RecordRepository
    from fitness_tracker.services.workouts import WorkoutRepository

MIN_SEARCH_LENGTH = 2
PROFILE_FIELDS = frozenset(
    {"name", "weight", "height", "age", "gender", "activity_level", "goal"}
)

_logger = logging.getLogger(__name__)


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return a user by id, if present."""

    def get_users(self, user_ids: list[UUID]) -> list[UserRecord]:
        """Return the users that exist among the given ids."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""

    def create_user(self, name: str, email: str) -> UserRecord:
        """Create and return a new user record."""

    def create_settings(self, user_id: UUID, timezone: str | None) -> None:
        """Create initial settings for a user."""

    def search_by_name(
        self, query: str, exclude_id: UUID, limit: int
    ) -> list[UserRecord]:
        """Return users whose name contains the query, case-insensitively."""

    def update_profile(self, user_id: UUID, fields: dict[str, object]) -> UserRecord:
        """Update profile fields and return the stored user."""

    def delete_user(self, user_id: UUID) -> None:
        """Delete the user row."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository

    def create_user(self, name: str, email: str) -> UserRecord:
        """Create a user with default settings."""
        cleaned_name = (name or "").strip()
        cleaned_email = (email or "").strip().lower()
        if not cleaned_name or "@" not in cleaned_email:
            raise ValidationError("A name and a valid email are required")
        if self.repository.get_by_email(cleaned_email):
            raise ValidationError("User already exists")
        created = self.repository.create_user(cleaned_name, cleaned_email)
        self.repository.create_settings(created.id, timezone=None)
        return created

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return a user or raise NotFound."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFound(f"User {user_id} not found")
        return user

    def search(self, user_id: UUID, query: str, limit: int = 20) -> list[UserRecord]:
        """Search other users by name."""
        cleaned = (query or "").strip()
        if len(cleaned) < MIN_SEARCH_LENGTH:
            return []
        return self.repository.search_by_name(cleaned, exclude_id=user_id, limit=limit)

    def update_profile(self, user_id: UUID, fields: dict[str, object]) -> UserRecord:
        """Update the editable profile fields of a user."""
        self.get_user(user_id)
        updates = {
            key: value
            for key, value in fields.items()
            if key in PROFILE_FIELDS and value is not None
        }
        if "name" in updates and not str(updates["name"]).strip():
            raise ValidationError("Name cannot be empty")
        if not updates:
            return self.get_user(user_id)
        return self.repository.update_profile(user_id, updates)


@dataclass
class AccountService:
    """Deletes a user together with everything they own."""

    users: UserRepository
    meals: "MealRepository"
    workouts: "WorkoutRepository"
    records: "RecordRepository"
    friends: "FriendRepository"

    def delete_account(self, user_id: UUID) -> None:
        """Cascade-delete the user's events, records and friend edges."""
        if self.users.get_user(user_id) is None:
            raise NotFound(f"User {user_id} not found")
        self.meals.delete_user_meals(user_id)
        self.workouts.delete_user_workouts(user_id)
        self.records.delete_user_records(user_id)
        self.friends.delete_user_edges(user_id)
        self.users.delete_user(user_id)
        _logger.info("Deleted account %s", user_id)
