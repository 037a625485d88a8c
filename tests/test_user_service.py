"""Tests for user service."""

from uuid import uuid4

import pytest

from fitness_tracker.domain.errors import NotFoundError
from fitness_tracker.domain.profile import Goal
from fitness_tracker.services.users import UserService
from tests.conftest import InMemoryUserRepository, make_user_payload


def test_register_creates_user_with_normalized_email() -> None:
    repository = InMemoryUserRepository()
    service = UserService(repository)

    user = service.register(make_user_payload(email="Alex@Example.com"))

    assert user.email == "alex@example.com"
    assert user.id in repository.users


def test_register_returns_existing_user_for_same_email() -> None:
    repository = InMemoryUserRepository()
    service = UserService(repository)

    first = service.register(make_user_payload())
    second = service.register(make_user_payload(email="ALEX@example.com", age=50))

    assert second == first
    assert len(repository.users) == 1


def test_get_user_raises_when_missing() -> None:
    service = UserService(InMemoryUserRepository())

    with pytest.raises(NotFoundError):
        service.get_user(uuid4())


def test_update_profile_changes_fields() -> None:
    service = UserService(InMemoryUserRepository())
    user = service.register(make_user_payload())

    updated = service.update_profile(
        user.id, {"goal": Goal.WEIGHT_LOSS, "weight_kg": 78.0}
    )

    assert updated.goal == Goal.WEIGHT_LOSS
    assert updated.to_profile().weight_kg == 78.0


def test_update_profile_with_empty_payload_returns_user() -> None:
    service = UserService(InMemoryUserRepository())
    user = service.register(make_user_payload())

    assert service.update_profile(user.id, {}) == user
