"""Records and analytics endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from fitness_tracker.api import serializers
from fitness_tracker.api.auth import current_user_id, get_container
from fitness_tracker.containers import AppContainer

router = APIRouter(prefix="/api", tags=["insights"])


@router.get("/records")
async def list_records(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return the user's personal bests."""
    records = container.record_service.list_records(user_id)
    return [serializers.record(record) for record in records]


@router.post("/records/update")
async def update_records(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Re-evaluate personal bests and return the ones that improved."""
    improved = container.record_service.reconcile(user_id)
    return {"updated": [serializers.record(record) for record in improved]}


@router.get("/analytics/summary")
async def analytics_summary(
    days: int = Query(default=7, ge=1, le=365),
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the trailing-window activity summary."""
    summary = container.analytics_service.summarize(user_id, window_days=days)
    return serializers.summary(summary)


@router.get("/analytics/calorie-history")
async def calorie_history(
    days: int = Query(default=7, ge=1, le=365),
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return calories consumed per day, oldest first."""
    points = container.analytics_service.calorie_history(user_id, window_days=days)
    return serializers.daily_series(points, "total_calories")


@router.get("/analytics/lifetime-stats")
async def lifetime_stats(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return all-time totals."""
    return serializers.lifetime(container.analytics_service.lifetime_stats(user_id))
