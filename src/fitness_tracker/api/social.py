"""Friends, leaderboard and feed endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from fitness_tracker.api import serializers
from fitness_tracker.api.auth import current_user_id, get_container
from fitness_tracker.containers import AppContainer

router = APIRouter(prefix="/api/friends", tags=["friends"])


@router.get("")
async def list_friends(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return confirmed friends and pending incoming requests."""
    friends = container.friend_service.list_friends(user_id)
    requests = container.friend_service.list_incoming_requests(user_id)
    return {
        "friends": [serializers.user_summary(user) for user in friends],
        "friend_requests": [serializers.user_summary(user) for user in requests],
    }


@router.get("/search")
async def search_users(
    q: str = Query(default=""),
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Search other users by name."""
    users = container.user_service.search(user_id, q)
    return [serializers.user_summary(user) for user in users]


@router.post("/send-request/{recipient_id}")
async def send_request(
    recipient_id: UUID,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Send a friend request."""
    container.friend_service.send_request(user_id, recipient_id)
    return {"msg": "Friend request sent"}


@router.post("/accept-request/{sender_id}")
async def accept_request(
    sender_id: UUID,
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Accept a pending friend request."""
    container.friend_service.accept_request(user_id, sender_id)
    return {"msg": "Friend request accepted"}


@router.get("/leaderboard")
async def leaderboard(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return the user and their friends ranked by fit score."""
    entries = await container.leaderboard_service.compute(user_id)
    return [serializers.leaderboard_entry(entry) for entry in entries]


@router.get("/feed")
async def feed(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return recent activity of the user and their friends."""
    items = container.history_service.get_feed(user_id)
    return [serializers.activity(item) for item in items]


@router.get("/suggestions")
async def suggestions(
    user_id: UUID = Depends(current_user_id),
    container: AppContainer = Depends(get_container),
) -> list[dict[str, object]]:
    """Return friends-of-friends the user could add."""
    users = container.friend_service.suggestions(user_id)
    return [serializers.user_summary(user) for user in users]
