"""Meal, workout and history endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, status

from fitness_tracker.api import serializers
from fitness_tracker.api.auth import current_user_id, get_container
from fitness_tracker.api.schemas import MealIn, MealUpdate, WorkoutIn, WorkoutUpdate
from fitness_tracker.containers import AppContainer

router = APIRouter(prefix="/api", tags=["activity"])


@router.get("/meals")
async def list_meals(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return the user's meals, newest first."""
    return [serializers.meal(m) for m in container.meal_service.list_meals(user_id)]


@router.post("/meals", status_code=status.HTTP_201_CREATED)
async def log_meal(
    payload: MealIn,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Log a meal."""
    meal = container.meal_service.log_meal(
        user_id, payload.name, payload.calories, payload.occurred_at
    )
    return serializers.meal(meal)


@router.put("/meals/{meal_id}")
async def update_meal(
    meal_id: UUID,
    payload: MealUpdate,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Edit a meal."""
    meal = container.meal_service.update_meal(
        user_id, meal_id, name=payload.name, calories=payload.calories
    )
    return serializers.meal(meal)


@router.delete("/meals/{meal_id}")
async def delete_meal(
    meal_id: UUID,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Delete a meal."""
    container.meal_service.delete_meal(user_id, meal_id)
    return {"msg": "Meal removed"}


@router.get("/workouts")
async def list_workouts(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return the user's workouts, newest first."""
    workouts = container.workout_service.list_workouts(user_id)
    return [serializers.workout(w) for w in workouts]


@router.post("/workouts", status_code=status.HTTP_201_CREATED)
async def log_workout(
    payload: WorkoutIn,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Log a workout."""
    workout = container.workout_service.log_workout(
        user_id,
        payload.name,
        payload.duration,
        calories_burned=payload.calories_burned,
        occurred_at=payload.occurred_at,
    )
    return serializers.workout(workout)


@router.put("/workouts/{workout_id}")
async def update_workout(
    workout_id: UUID,
    payload: WorkoutUpdate,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Edit a workout."""
    workout = container.workout_service.update_workout(
        user_id,
        workout_id,
        name=payload.name,
        duration=payload.duration,
        calories_burned=payload.calories_burned,
    )
    return serializers.workout(workout)


@router.delete("/workouts/{workout_id}")
async def delete_workout(
    workout_id: UUID,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Delete a workout."""
    container.workout_service.delete_workout(user_id, workout_id)
    return {"msg": "Workout removed"}


@router.get("/history")
async def history(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return meals and workouts combined, newest first."""
    items = container.history_service.get_history(user_id)
    return [serializers.activity(item) for item in items]
