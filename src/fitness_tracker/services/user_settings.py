"""User settings service."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fitness_tracker.domain.errors import ValidationError


class UserSettingsRepository(Protocol):
    """Persistence interface for user settings."""

    def get_timezone(self, user_id: UUID) -> str | None:
        """Return the user's timezone if set."""

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Update the user's timezone."""


@dataclass
class UserSettingsService:
    """Service for user settings."""

    repository: UserSettingsRepository
    default_timezone: str = "UTC"

    def get_timezone(self, user_id: UUID) -> str:
        """Return the user timezone or the configured default if unset."""
        return self.repository.get_timezone(user_id) or self.default_timezone

    def get_zone(self, user_id: UUID) -> ZoneInfo:
        """Return the user's timezone as a ZoneInfo."""
        timezone = self.get_timezone(user_id)
        if not _is_valid_timezone(timezone):
            return ZoneInfo(self.default_timezone)
        return ZoneInfo(timezone)

    def set_timezone(self, user_id: UUID, timezone: str) -> None:
        """Persist a user's timezone."""
        if not _is_valid_timezone(timezone):
            raise ValidationError(f"Unknown timezone: {timezone!r}")
        self.repository.set_timezone(user_id, timezone)

    def is_timezone_set(self, user_id: UUID) -> bool:
        """Return True when the user's timezone is configured."""
        return self.repository.get_timezone(user_id) is not None


def _is_valid_timezone(value: str) -> bool:
    try:
        ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError, OSError):
        return False
    return True
