"""Domain models for the friends relation."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class FriendStatus(str, Enum):
    """State of a friend edge."""

    PENDING = "pending"
    ACCEPTED = "accepted"


@dataclass(frozen=True)
class FriendEdge:
    """Single edge between two users, pending or accepted."""

    requester_id: UUID
    addressee_id: UUID
    status: FriendStatus
    created_at: datetime | None = None

    def other(self, user_id: UUID) -> UUID:
        """Return the user on the other side of the edge."""
        if user_id == self.requester_id:
            return self.addressee_id
        return self.requester_id

    def involves(self, user_id: UUID) -> bool:
        return user_id in {self.requester_id, self.addressee_id}
