"""User-related business logic."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.errors import NotFoundError
from fitness_tracker.domain.profile import UserRecord


class UserRepository(Protocol):
    """Persistence interface for user data."""

    def get_user(self, user_id: UUID) -> UserRecord | None:
        """Return the user for an id, if present."""

    def get_by_email(self, email: str) -> UserRecord | None:
        """Return the user registered with an email, if present."""

    def create_user(self, payload: dict[str, object]) -> UserRecord:
        """Create and return a new user record."""

    def update_user(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        """Apply field updates and return the stored record."""


@dataclass
class UserService:
    """Application service for user profiles."""

    repository: UserRepository

    def get_user(self, user_id: UUID) -> UserRecord:
        """Return a user or raise NotFoundError."""
        user = self.repository.get_user(user_id)
        if user is None:
            raise NotFoundError(f"User {user_id} not found")
        return user

    def register(self, payload: dict[str, object]) -> UserRecord:
        """Create a user, or return the existing one for the same email."""
        email = str(payload["email"]).lower()
        existing = self.repository.get_by_email(email)
        if existing:
            return existing
        return self.repository.create_user({**payload, "email": email})

    def update_profile(self, user_id: UUID, payload: dict[str, object]) -> UserRecord:
        """Update profile fields for an existing user."""
        self.get_user(user_id)
        if not payload:
            return self.get_user(user_id)
        return self.repository.update_user(user_id, payload)
