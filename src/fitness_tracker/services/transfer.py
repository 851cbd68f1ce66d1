"""CSV export and import of a user's meals and workouts."""

import csv
import io
import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from fitness_tracker.domain.errors import ValidationError
from fitness_tracker.services.meals import MealRepository, validate_calories
from fitness_tracker.services.workouts import WorkoutRepository

CSV_HEADER = ["Type", "Name", "Date", "Calories", "Duration", "Calories Burned"]
EXPORT_FILENAME = "FitTrack_Export.csv"

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportReport:
    """Counts of rows imported and skipped."""

    meals: int
    workouts: int
    skipped: int


@dataclass
class TransferService:
    """Converts a user's logs to and from CSV."""

    meal_repository: MealRepository
    workout_repository: WorkoutRepository

    def export_csv(self, user_id: UUID) -> str:
        """Return all meals then all workouts as CSV, oldest first."""
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow(CSV_HEADER)
        for meal in reversed(self.meal_repository.list_meals([user_id])):
            writer.writerow(
                ["Meal", meal.name, meal.occurred_at.isoformat(), meal.calories, "", ""]
            )
        for workout in reversed(self.workout_repository.list_workouts([user_id])):
            burned = workout.calories_burned
            writer.writerow(
                [
                    "Workout",
                    workout.name,
                    workout.occurred_at.isoformat(),
                    "",
                    workout.duration,
                    "" if burned is None else burned,
                ]
            )
        return buffer.getvalue()

    def import_csv(self, user_id: UUID, content: str) -> ImportReport:
        """Import rows in the export format, skipping malformed ones."""
        meals = workouts = skipped = 0
        reader = csv.DictReader(io.StringIO(content))
        for line_number, row in enumerate(reader, start=2):
            try:
                kind = self._import_row(user_id, row)
            except (ValidationError, ValueError, TypeError, AttributeError) as exc:
                _logger.info("Skipping CSV row %s: %s", line_number, exc)
                skipped += 1
                continue
            if kind == "meal":
                meals += 1
            else:
                workouts += 1
        return ImportReport(meals=meals, workouts=workouts, skipped=skipped)

    def _import_row(self, user_id: UUID, row: dict[str, str | None]) -> str:
        kind = (row.get("Type") or "").strip().lower()
        name = (row.get("Name") or "").strip()
        if not name:
            raise ValidationError("missing name")
        occurred_at = _parse_date(row.get("Date"))
        if kind == "meal":
            calories = validate_calories(int((row.get("Calories") or "").strip()))
            self.meal_repository.create_meal(user_id, name, calories, occurred_at)
            return "meal"
        if kind == "workout":
            duration = (row.get("Duration") or "").strip()
            if not duration:
                raise ValidationError("missing duration")
            raw_burned = (row.get("Calories Burned") or "").strip()
            burned = (
                validate_calories(int(raw_burned), field="calories_burned")
                if raw_burned
                else None
            )
            self.workout_repository.create_workout(
                user_id, name, duration, burned, occurred_at
            )
            return "workout"
        raise ValidationError(f"unknown row type {kind!r}")


def _parse_date(raw: str | None) -> datetime:
    value = (raw or "").strip()
    if not value:
        raise ValidationError("missing date")
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed
