"""Tests for CSV export and import."""

from datetime import UTC, datetime
from uuid import uuid4

from fitness_tracker.services.transfer import CSV_HEADER, TransferService


def test_export_writes_header_for_empty_history(
    meal_repository, workout_repository
) -> None:
    service = TransferService(meal_repository, workout_repository)

    content = service.export_csv(uuid4())

    assert content == ",".join(CSV_HEADER) + "\n"


def test_export_lists_meals_then_workouts_oldest_first(
    meal_repository, workout_repository
) -> None:
    user_id = uuid4()
    meal_repository.create_meal(
        user_id, "Dinner", 800, datetime(2024, 1, 2, 19, tzinfo=UTC)
    )
    meal_repository.create_meal(
        user_id, "Breakfast, big", 500, datetime(2024, 1, 1, 8, tzinfo=UTC)
    )
    workout_repository.create_workout(
        user_id, "Run", "30 minutes", None, datetime(2024, 1, 1, 7, tzinfo=UTC)
    )
    service = TransferService(meal_repository, workout_repository)

    lines = service.export_csv(user_id).splitlines()

    assert lines == [
        "Type,Name,Date,Calories,Duration,Calories Burned",
        'Meal,"Breakfast, big",2024-01-01T08:00:00+00:00,500,,',
        "Meal,Dinner,2024-01-02T19:00:00+00:00,800,,",
        "Workout,Run,2024-01-01T07:00:00+00:00,,30 minutes,",
    ]


def test_import_skips_malformed_rows(meal_repository, workout_repository) -> None:
    user_id = uuid4()
    content = "\n".join(
        [
            "Type,Name,Date,Calories,Duration,Calories Burned",
            "Meal,Oats,2024-01-01T08:00:00Z,350,,",
            "Workout,Ride,2024-01-01T18:00:00,,1 hour,420",
            "Meal,Mystery,not-a-date,100,,",
            "Meal,Soup,2024-01-02T12:00:00Z,-5,,",
            "Workout,Walk,2024-01-02T12:00:00Z,,,",
            "Snack,Chips,2024-01-02T12:00:00Z,150,,",
        ]
    )
    service = TransferService(meal_repository, workout_repository)

    report = service.import_csv(user_id, content)

    assert (report.meals, report.workouts, report.skipped) == (1, 1, 4)
    [workout] = workout_repository.list_workouts([user_id])
    assert workout.calories_burned == 420
    assert workout.occurred_at.tzinfo is not None


def test_export_then_import_restores_events(
    meal_repository, workout_repository
) -> None:
    source = uuid4()
    meal_repository.create_meal(source, "Oats", 350, datetime(2024, 1, 1, tzinfo=UTC))
    workout_repository.create_workout(
        source, "Lift", "45 min", 300, datetime(2024, 1, 1, tzinfo=UTC)
    )
    service = TransferService(meal_repository, workout_repository)
    target = uuid4()

    report = service.import_csv(target, service.export_csv(source))

    assert (report.meals, report.workouts, report.skipped) == (1, 1, 0)
    [meal] = meal_repository.list_meals([target])
    assert (meal.name, meal.calories) == ("Oats", 350)
