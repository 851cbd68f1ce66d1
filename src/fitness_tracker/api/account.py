"""User profile, settings and data transfer endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from fitness_tracker.api import serializers
from fitness_tracker.api.auth import current_user_id, get_container, require_api_token
from fitness_tracker.api.schemas import (
    CsvImport,
    ProfileUpdate,
    TimezoneUpdate,
    UserCreate,
)
from fitness_tracker.containers import AppContainer
from fitness_tracker.services.transfer import EXPORT_FILENAME

router = APIRouter(prefix="/api/users", tags=["users"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_api_token)],
)
async def create_user(
    payload: UserCreate, container: AppContainer = Depends(get_container)
) -> dict[str, object]:
    """Register a user."""
    user = container.user_service.create_user(payload.name, payload.email)
    return serializers.user_profile(user)


@router.get("/me")
async def me(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the acting user's profile and timezone."""
    profile = serializers.user_profile(container.user_service.get_user(user_id))
    profile["timezone"] = container.user_settings_service.get_timezone(user_id)
    return profile


@router.put("/profile")
async def update_profile(
    payload: ProfileUpdate,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Update editable profile fields."""
    fields = payload.model_dump(exclude_unset=True)
    user = container.user_service.update_profile(user_id, fields)
    return serializers.user_profile(user)


@router.put("/timezone")
async def update_timezone(
    payload: TimezoneUpdate,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Set the IANA timezone used for daily boundaries."""
    container.user_settings_service.set_timezone(user_id, payload.timezone)
    return {"timezone": payload.timezone}


@router.get("/export-data")
async def export_data(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> Response:
    """Download the user's meals and workouts as CSV."""
    content = container.transfer_service.export_csv(user_id)
    return Response(
        content=content,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )


@router.post("/import-data")
async def import_data(
    payload: CsvImport,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, int]:
    """Import meals and workouts from CSV in the export format."""
    report = container.transfer_service.import_csv(user_id, payload.content)
    container.record_service.reconcile(user_id)
    return {
        "meals": report.meals,
        "workouts": report.workouts,
        "skipped": report.skipped,
    }


@router.delete("/delete-account")
async def delete_account(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Delete the user and everything they own."""
    container.account_service.delete_account(user_id)
    return {"msg": "Account deleted"}
