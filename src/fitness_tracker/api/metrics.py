"""Stateless health calculator endpoints."""

from fastapi import APIRouter, Depends

from fitness_tracker.api.auth import require_api_token
from fitness_tracker.api.serializers import (
    serialize_bmi,
    serialize_caloric_plan,
    serialize_ideal_weight,
)
from fitness_tracker.domain.profile import UserProfile
from fitness_tracker.metrics.engine import (
    calculate_bmi,
    calculate_caloric_needs,
    get_bmi_category,
    get_ideal_weight_range,
)

router = APIRouter(
    prefix="/metrics", tags=["metrics"], dependencies=[Depends(require_api_token)]
)


@router.get("/bmi")
async def bmi(weight: float, height: float) -> dict[str, object]:
    """Return BMI and its category."""
    value = calculate_bmi(weight, height)
    return serialize_bmi(value, get_bmi_category(value))


@router.get("/ideal-weight")
async def ideal_weight(height: float) -> dict[str, object]:
    """Return the healthy weight range for a height."""
    return serialize_ideal_weight(get_ideal_weight_range(height))


@router.post("/caloric-needs")
async def caloric_needs(profile: UserProfile) -> dict[str, object]:
    """Return BMR, TDEE, recommended calories and macros."""
    return serialize_caloric_plan(calculate_caloric_needs(profile))
