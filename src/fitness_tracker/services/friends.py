"""Friend requests, friendships and suggestions."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.errors import NotFound, ValidationError
from fitness_tracker.domain.friends import FriendEdge, FriendStatus
from fitness_tracker.domain.models import UserRecord
from fitness_tracker.services.users import UserRepository

SUGGESTION_LIMIT = 5


class FriendRepository(Protocol):
    """Persistence interface for the friends relation.

    Implementations keep at most one edge per unordered pair of users.
    """

    def get_edge(self, user_a: UUID, user_b: UUID) -> FriendEdge | None:
        """Return the edge between two users in either direction."""

    def create_request(self, requester_id: UUID, addressee_id: UUID) -> FriendEdge:
        """Insert a pending edge, raising ValidationError if one exists."""

    def accept_request(
        self, requester_id: UUID, addressee_id: UUID
    ) -> FriendEdge | None:
        """Move a pending edge to accepted.

        Returns None when no pending edge from requester to addressee exists.
        """

    def list_edges(
        self, user_id: UUID, status: FriendStatus | None = None
    ) -> list[FriendEdge]:
        """Return edges touching a user, optionally filtered by status."""

    def delete_user_edges(self, user_id: UUID) -> None:
        """Delete every edge touching a user."""


@dataclass
class FriendService:
    """Service for the social graph."""

    repository: FriendRepository
    user_repository: UserRepository

    def send_request(self, sender_id: UUID, recipient_id: UUID) -> FriendEdge:
        """Send a friend request from sender to recipient."""
        if sender_id == recipient_id:
            raise ValidationError("Cannot send a friend request to yourself")
        for user_id in (sender_id, recipient_id):
            if self.user_repository.get_user(user_id) is None:
                raise NotFound(f"User {user_id} not found")
        existing = self.repository.get_edge(sender_id, recipient_id)
        if existing is not None:
            if existing.status == FriendStatus.ACCEPTED:
                raise ValidationError("You are already friends")
            raise ValidationError("Friend request already pending")
        return self.repository.create_request(sender_id, recipient_id)

    def accept_request(self, user_id: UUID, sender_id: UUID) -> FriendEdge:
        """Accept a pending request that sender_id sent to user_id."""
        existing = self.repository.get_edge(sender_id, user_id)
        if existing is None or existing.requester_id != sender_id:
            raise NotFound("No friend request from this user")
        if existing.status == FriendStatus.ACCEPTED:
            raise ValidationError("Friend request already accepted")
        accepted = self.repository.accept_request(sender_id, user_id)
        if accepted is None:
            raise ValidationError("Friend request already accepted")
        return accepted

    def friend_ids(self, user_id: UUID) -> list[UUID]:
        """Return ids of confirmed friends."""
        edges = self.repository.list_edges(user_id, FriendStatus.ACCEPTED)
        return [edge.other(user_id) for edge in edges]

    def list_friends(self, user_id: UUID) -> list[UserRecord]:
        """Return confirmed friends."""
        return self.user_repository.get_users(self.friend_ids(user_id))

    def list_incoming_requests(self, user_id: UUID) -> list[UserRecord]:
        """Return users with a pending request addressed to user_id."""
        edges = self.repository.list_edges(user_id, FriendStatus.PENDING)
        senders = [edge.requester_id for edge in edges if edge.addressee_id == user_id]
        return self.user_repository.get_users(senders)

    def suggestions(self, user_id: UUID) -> list[UserRecord]:
        """Suggest friends of friends the user isn't connected to yet."""
        friends = self.friend_ids(user_id)
        if not friends:
            return []
        sent = {
            edge.addressee_id
            for edge in self.repository.list_edges(user_id, FriendStatus.PENDING)
            if edge.requester_id == user_id
        }
        excluded = {user_id, *friends, *sent}
        candidates: list[UUID] = []
        for friend_id in friends:
            for candidate in self.friend_ids(friend_id):
                if candidate not in excluded and candidate not in candidates:
                    candidates.append(candidate)
        return self.user_repository.get_users(candidates)[:SUGGESTION_LIMIT]
