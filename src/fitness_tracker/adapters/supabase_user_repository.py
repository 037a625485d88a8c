"""Supabase-backed user repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from fitness_tracker.domain.profile import Gender, Goal, UserRecord
from fitness_tracker.services.users import UserRepository

_USER_COLUMNS = (
    "id, name, email, age, gender, height_cm, weight_kg, goal, experience, created_at"
)


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user persistence."""

    client: Client

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""
        response = (
            self.client.table("users")
            .select(_USER_COLUMNS)
            .eq("email", email)
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_row(response.data[0])
        return None

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create a new user row and return it."""
        response = self.client.table("users").insert(_to_row(payload)).execute()
        if not response.data:
            raise RuntimeError("Failed to create user in Supabase")
        return _parse_row(response.data[0])

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        """Update profile columns and return the stored row."""
        response = (
            self.client.table("users")
            .update(_to_row(payload))
            .eq("id", str(user_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update user in Supabase")
        return _parse_row(response.data[0])


def _to_row(payload: dict[str, object]) -> dict[str, object]:
    row = {}
    for key, value in payload.items():
        if isinstance(value, Gender | Goal):
            row[key] = value.value
        else:
            row[key] = value
    return row


def _parse_row(row: dict[str, object]) -> UserRecord:
    created_raw = row.get("created_at")
    return UserRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        email=str(row.get("email", "")),
        age=int(row["age"]),
        gender=Gender(row["gender"]),
        height_cm=float(row["height_cm"]),
        weight_kg=float(row["weight_kg"]),
        goal=Goal(row["goal"]),
        experience=row.get("experience"),
        created_at=(
            datetime.fromisoformat(created_raw)
            if isinstance(created_raw, str) and created_raw
            else None
        ),
    )
