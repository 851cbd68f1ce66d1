"""Supabase repository for the friends relation."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_support import (
    execute,
    is_unique_violation,
    parse_timestamp,
)
from fitness_tracker.domain.errors import StoreError, ValidationError
from fitness_tracker.domain.friends import FriendEdge, FriendStatus
from fitness_tracker.services.friends import FriendRepository

_COLUMNS = "requester_id, addressee_id, status, created_at"


@dataclass
class SupabaseFriendRepository(FriendRepository):
    """Supabase implementation backed by a single ``friendships`` table.

    A unique index on (least(requester_id, addressee_id),
    greatest(requester_id, addressee_id)) keeps one edge per pair.
    """

    client: Client

    def get_edge(self, user_a: UUID, user_b: UUID) -> FriendEdge | None:
        """Return the edge between two users in either direction."""
        a, b = str(user_a), str(user_b)
        rows = execute(
            self.client.table("friendships")
            .select(_COLUMNS)
            .or_(
                f"and(requester_id.eq.{a},addressee_id.eq.{b}),"
                f"and(requester_id.eq.{b},addressee_id.eq.{a})"
            )
            .limit(1)
        )
        return _parse_edge(rows[0]) if rows else None

    def create_request(self, requester_id: UUID, addressee_id: UUID) -> FriendEdge:
        """Insert a pending edge."""
        try:
            rows = execute(
                self.client.table("friendships").insert(
                    {
                        "requester_id": str(requester_id),
                        "addressee_id": str(addressee_id),
                        "status": FriendStatus.PENDING.value,
                    }
                )
            )
        except StoreError as exc:
            if is_unique_violation(exc):
                raise ValidationError("Friend relation already exists") from exc
            raise
        if not rows:
            raise StoreError("Failed to create friend request")
        return _parse_edge(rows[0])

    def accept_request(
        self, requester_id: UUID, addressee_id: UUID
    ) -> FriendEdge | None:
        """Flip a pending edge to accepted in one guarded update."""
        rows = execute(
            self.client.table("friendships")
            .update({"status": FriendStatus.ACCEPTED.value})
            .eq("requester_id", str(requester_id))
            .eq("addressee_id", str(addressee_id))
            .eq("status", FriendStatus.PENDING.value)
        )
        return _parse_edge(rows[0]) if rows else None

    def list_edges(
        self, user_id: UUID, status: FriendStatus | None = None
    ) -> list[FriendEdge]:
        """Return edges touching a user."""
        uid = str(user_id)
        query = (
            self.client.table("friendships")
            .select(_COLUMNS)
            .or_(f"requester_id.eq.{uid},addressee_id.eq.{uid}")
        )
        if status is not None:
            query = query.eq("status", status.value)
        return [_parse_edge(row) for row in execute(query)]

    def delete_user_edges(self, user_id: UUID) -> None:
        """Delete every edge touching a user."""
        uid = str(user_id)
        execute(
            self.client.table("friendships")
            .delete()
            .or_(f"requester_id.eq.{uid},addressee_id.eq.{uid}")
        )


def _parse_edge(row: dict[str, object]) -> FriendEdge:
    created_at = row.get("created_at")
    return FriendEdge(
        requester_id=UUID(str(row["requester_id"])),
        addressee_id=UUID(str(row["addressee_id"])),
        status=FriendStatus(str(row["status"])),
        created_at=parse_timestamp(created_at) if created_at else None,
    )
