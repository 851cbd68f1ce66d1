"""Supabase repository for personal-best records."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.adapters.supabase_support import execute, parse_timestamp
from fitness_tracker.domain.records import Record, RecordCandidate, RecordType
from fitness_tracker.services.records import RecordRepository

_COLUMNS = (
    "user_id, record_type, value, unit, achieved_at, source_meal_id, "
    "source_workout_id"
)


@dataclass
class SupabaseRecordRepository(RecordRepository):
    """Supabase implementation for records.

    Relies on a unique (user_id, record_type) index. Every write is a single
    statement guarded by ``value < candidate``, so concurrent reconciliations
    can only move a record upwards.
    """

    client: Client

    def list_records(self, owner_id: UUID) -> list[Record]:
        """Return the records of a user."""
        rows = execute(
            self.client.table("records")
            .select(_COLUMNS)
            .eq("user_id", str(owner_id))
            .order("record_type", desc=False)
        )
        return [_parse_record(row) for row in rows]

    def upsert_if_greater(
        self, owner_id: UUID, candidate: RecordCandidate, achieved_at: datetime
    ) -> Record | None:
        """Insert the record or raise it when the candidate is higher."""
        payload = _payload(owner_id, candidate, achieved_at)
        updated = self._conditional_update(owner_id, candidate, payload)
        if updated is not None:
            return updated
        inserted = execute(
            self.client.table("records").upsert(
                payload, on_conflict="user_id,record_type", ignore_duplicates=True
            )
        )
        if inserted:
            return _parse_record(inserted[0])
        # Lost an insert race; the winner's row may still be lower.
        return self._conditional_update(owner_id, candidate, payload)

    def delete_user_records(self, owner_id: UUID) -> None:
        """Delete every record of a user."""
        execute(self.client.table("records").delete().eq("user_id", str(owner_id)))

    def _conditional_update(
        self,
        owner_id: UUID,
        candidate: RecordCandidate,
        payload: dict[str, object],
    ) -> Record | None:
        rows = execute(
            self.client.table("records")
            .update(payload)
            .eq("user_id", str(owner_id))
            .eq("record_type", candidate.record_type.value)
            .lt("value", candidate.value)
        )
        return _parse_record(rows[0]) if rows else None


def _payload(
    owner_id: UUID, candidate: RecordCandidate, achieved_at: datetime
) -> dict[str, object]:
    payload: dict[str, object] = {
        "user_id": str(owner_id),
        "record_type": candidate.record_type.value,
        "value": candidate.value,
        "unit": candidate.record_type.unit,
        "achieved_at": achieved_at.isoformat(),
    }
    if candidate.source_meal_id is not None:
        payload["source_meal_id"] = str(candidate.source_meal_id)
    if candidate.source_workout_id is not None:
        payload["source_workout_id"] = str(candidate.source_workout_id)
    return payload


def _parse_record(row: dict[str, object]) -> Record:
    record_type = RecordType(str(row["record_type"]))
    meal_id = row.get("source_meal_id")
    workout_id = row.get("source_workout_id")
    return Record(
        owner_id=UUID(str(row["user_id"])),
        record_type=record_type,
        value=float(row.get("value") or 0),
        unit=str(row.get("unit") or record_type.unit),
        achieved_at=parse_timestamp(row.get("achieved_at")),
        source_meal_id=UUID(str(meal_id)) if meal_id else None,
        source_workout_id=UUID(str(workout_id)) if workout_id else None,
    )
