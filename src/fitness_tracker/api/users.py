"""User profile endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from fitness_tracker.api.auth import require_api_token
from fitness_tracker.api.schemas import UserCreate, UserUpdate  # noqa: TC001
from fitness_tracker.api.serializers import (
    serialize_health_insights,
    serialize_user,
)

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(
    prefix="/users", tags=["users"], dependencies=[Depends(require_api_token)]
)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(payload: UserCreate, request: Request) -> dict[str, object]:
    """Register a user profile."""
    container: AppContainer = request.app.state.container
    user = container.user_service.register(payload.to_payload())
    return {"user": serialize_user(user)}


@router.get("/{user_id}")
async def get_user(user_id: UUID, request: Request) -> dict[str, object]:
    """Return a user profile."""
    container: AppContainer = request.app.state.container
    return {"user": serialize_user(container.user_service.get_user(user_id))}


@router.patch("/{user_id}")
async def update_user(
    user_id: UUID, payload: UserUpdate, request: Request
) -> dict[str, object]:
    """Update profile fields."""
    container: AppContainer = request.app.state.container
    user = container.user_service.update_profile(user_id, payload.to_payload())
    return {"user": serialize_user(user)}


@router.get("/{user_id}/health-insights")
async def health_insights(
    user_id: UUID,
    request: Request,
    days: int | None = Query(default=None, ge=1),
) -> dict[str, object]:
    """Return BMI, ideal weight, caloric needs and insights for a user."""
    container: AppContainer = request.app.state.container
    report = container.health_service.get_insights(user_id, days=days)
    return serialize_health_insights(report)
