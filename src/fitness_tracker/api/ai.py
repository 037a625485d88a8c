"""AI advice endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request

from fitness_tracker.api.auth import require_api_token
from fitness_tracker.api.schemas import DietAdviceRequest, TipsRequest  # noqa: TC001
from fitness_tracker.api.serializers import serialize_advice

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer

router = APIRouter(
    prefix="/users/{user_id}/ai", tags=["ai"], dependencies=[Depends(require_api_token)]
)


@router.post("/tips")
async def fitness_tips(
    user_id: UUID, payload: TipsRequest, request: Request
) -> dict[str, object]:
    """Return AI fitness tips for the user's goal."""
    container: AppContainer = request.app.state.container
    profile = container.user_service.get_user(user_id).to_profile()
    result = await container.advisor_service.get_fitness_tips(
        profile, payload.specific_request
    )
    return serialize_advice(result)


@router.post("/diet-advice")
async def diet_advice(
    user_id: UUID, payload: DietAdviceRequest, request: Request
) -> dict[str, object]:
    """Return AI diet advice for the user's goal."""
    container: AppContainer = request.app.state.container
    profile = container.user_service.get_user(user_id).to_profile()
    result = await container.advisor_service.get_diet_advice(profile, payload.goal)
    return serialize_advice(result, key="advice")
