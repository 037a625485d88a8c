"""Supabase repository for progress entries."""

from dataclasses import asdict, dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.progress import Measurements, Mood, ProgressSnapshot
from fitness_tracker.services.progress import ProgressRepository

_TABLE = "progress_entries"
_COLUMNS = (
    "id, user_id, date, weight_kg, bmi, height_cm, energy_level, "
    "body_fat_percentage, muscle_mass_kg, measurements, mood, notes"
)


@dataclass
class SupabaseProgressRepository(ProgressRepository):
    """Supabase implementation for progress persistence."""

    client: Client

    def create_entry(
        self, user_id: UUID, payload: dict[str, object]
    ) -> ProgressSnapshot:
        """Insert a progress row and return it."""
        response = (
            self.client.table(_TABLE)
            .insert({**_to_row(payload), "user_id": str(user_id)})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create progress entry")
        return _parse_row(response.data[0])

    def get_entry(self, user_id: UUID, entry_id: UUID) -> ProgressSnapshot | None:
        """Return an entry owned by the user, if present."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("id", str(entry_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def list_entries(  # noqa: PLR0913
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
        *,
        descending: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ProgressSnapshot]:
        """Return entries in the range ordered by date."""
        query = self.client.table(_TABLE).select(_COLUMNS).eq("user_id", str(user_id))
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lt("date", end.isoformat())
        query = query.order("date", desc=descending)
        if limit is not None:
            query = query.range(offset, offset + limit - 1)
        response = query.execute()
        return [_parse_row(row) for row in response.data or []]

    def count_entries(
        self, user_id: UUID, start: datetime | None = None, end: datetime | None = None
    ) -> int:
        """Return the number of entries in the range."""
        query = (
            self.client.table(_TABLE)
            .select("id", count="exact")
            .eq("user_id", str(user_id))
        )
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lt("date", end.isoformat())
        response = query.execute()
        if response.count is not None:
            return response.count
        return len(response.data or [])

    def get_previous_entry(
        self, user_id: UUID, before: datetime
    ) -> ProgressSnapshot | None:
        """Return the latest entry dated before a timestamp."""
        response = (
            self.client.table(_TABLE)
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .lt("date", before.isoformat())
            .order("date", desc=True)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def update_entry(
        self, entry_id: UUID, payload: dict[str, object]
    ) -> ProgressSnapshot:
        """Update a progress row and return it."""
        response = (
            self.client.table(_TABLE)
            .update(_to_row(payload))
            .eq("id", str(entry_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update progress entry")
        return _parse_row(response.data[0])

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete a progress row."""
        self.client.table(_TABLE).delete().eq("id", str(entry_id)).execute()


def _to_row(payload: dict[str, object]) -> dict[str, object]:
    row: dict[str, object] = {}
    for key, value in payload.items():
        if isinstance(value, datetime):
            row[key] = value.isoformat()
        elif isinstance(value, Measurements):
            row[key] = asdict(value)
        elif isinstance(value, Mood):
            row[key] = value.value
        else:
            row[key] = value
    return row


def _parse_row(row: dict[str, object]) -> ProgressSnapshot:
    measurements_raw = row.get("measurements")
    return ProgressSnapshot(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])) if row.get("user_id") else None,
        date=datetime.fromisoformat(str(row["date"])),
        weight_kg=float(row["weight_kg"]),
        bmi=_optional_float(row.get("bmi")),
        height_cm=_optional_float(row.get("height_cm")),
        energy_level=int(row.get("energy_level") or 5),
        body_fat_percentage=_optional_float(row.get("body_fat_percentage")),
        muscle_mass_kg=_optional_float(row.get("muscle_mass_kg")),
        measurements=(
            Measurements(**measurements_raw)
            if isinstance(measurements_raw, dict)
            else None
        ),
        mood=Mood(row.get("mood") or Mood.AVERAGE),
        notes=row.get("notes"),
    )


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)
