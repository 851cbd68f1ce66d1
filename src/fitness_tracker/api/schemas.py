"""Request bodies for the API."""

from datetime import datetime

from pydantic import BaseModel, Field


class MealIn(BaseModel):
    """Payload for logging a meal."""

    name: str = Field(min_length=1)
    calories: int = Field(ge=0)
    occurred_at: datetime | None = None


class MealUpdate(BaseModel):
    """Payload for editing a meal."""

    name: str | None = None
    calories: int | None = Field(default=None, ge=0)


class WorkoutIn(BaseModel):
    """Payload for logging a workout."""

    name: str = Field(min_length=1)
    duration: str = Field(min_length=1)
    calories_burned: int | None = Field(default=None, ge=0)
    occurred_at: datetime | None = None


class WorkoutUpdate(BaseModel):
    """Payload for editing a workout."""

    name: str | None = None
    duration: str | None = None
    calories_burned: int | None = Field(default=None, ge=0)


class ProfileUpdate(BaseModel):
    """Editable profile fields."""

    name: str | None = None
    weight: float | None = Field(default=None, ge=0)
    height: float | None = Field(default=None, ge=0)
    age: int | None = Field(default=None, ge=0)
    gender: str | None = None
    activity_level: str | None = None
    goal: str | None = None


class TimezoneUpdate(BaseModel):
    """Payload for setting the user's timezone."""

    timezone: str


class CsvImport(BaseModel):
    """CSV content in the export format."""

    content: str


class UserCreate(BaseModel):
    """Payload for registering a user."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
