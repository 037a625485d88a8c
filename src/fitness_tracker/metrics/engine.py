"""BMI, energy expenditure and macronutrient calculations."""

import math
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING

from fitness_tracker.domain.errors import InvalidInputError
from fitness_tracker.domain.metrics import (
    BMICategory,
    BMIReading,
    CaloricPlan,
    HealthInsights,
    IdealWeightRange,
    MacroSplit,
    MacroTarget,
)
from fitness_tracker.domain.profile import (
    Gender,
    Goal,
    UserProfile,
    parse_goal,
    parse_profile,
)
from fitness_tracker.metrics.insights import InsightContext, generate_insights
from fitness_tracker.metrics.rounding import round_half_up, round_int

if TYPE_CHECKING:
    from fitness_tracker.domain.progress import ProgressSnapshot, TrendReport

MODERATE_ACTIVITY_MULTIPLIER = 1.55
WEIGHT_LOSS_DEFICIT = 500
MUSCLE_GAIN_SURPLUS = 300
HEALTHY_BMI_MIN = 18.5
HEALTHY_BMI_MAX = 24.9
KCAL_PER_GRAM_PROTEIN = 4
KCAL_PER_GRAM_CARBS = 4
KCAL_PER_GRAM_FAT = 9

UNDERWEIGHT = BMICategory(
    category="Underweight",
    status="warning",
    description="You may need to gain weight. Consult with a healthcare provider.",
    recommendations=(
        "Increase caloric intake with nutrient-dense foods",
        "Focus on strength training to build muscle mass",
        "Consider consulting a nutritionist",
    ),
)
NORMAL_WEIGHT = BMICategory(
    category="Normal weight",
    status="success",
    description="You have a healthy weight for your height.",
    recommendations=(
        "Maintain current lifestyle habits",
        "Continue regular physical activity",
        "Focus on balanced nutrition",
    ),
)
OVERWEIGHT = BMICategory(
    category="Overweight",
    status="warning",
    description="You may benefit from weight management strategies.",
    recommendations=(
        "Create a moderate caloric deficit",
        "Increase physical activity",
        "Focus on portion control",
    ),
)
OBESE = BMICategory(
    category="Obese",
    status="danger",
    description="Consider consulting healthcare providers for weight management.",
    recommendations=(
        "Seek professional medical advice",
        "Consider structured weight loss program",
        "Focus on gradual, sustainable changes",
    ),
)

# (exclusive upper bound, category), checked in order.
_BMI_THRESHOLDS: tuple[tuple[float, BMICategory], ...] = (
    (18.5, UNDERWEIGHT),
    (25.0, NORMAL_WEIGHT),
    (30.0, OVERWEIGHT),
)

# protein, carbs, fat percentages
_MACRO_PERCENTAGES: dict[Goal, tuple[int, int, int]] = {
    Goal.WEIGHT_LOSS: (35, 35, 30),
    Goal.MUSCLE_GAIN: (30, 45, 25),
    Goal.MAINTENANCE: (25, 45, 30),
}


def _require_positive(name: str, value: float | None) -> float:
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"Missing {name} value")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Invalid {name} value: {value!r}") from exc
    if not math.isfinite(number) or number <= 0:
        raise InvalidInputError(f"Invalid {name} value: {value!r}")
    return number


def calculate_bmi(weight_kg: float | None, height_cm: float | None) -> float:
    """Return BMI for a weight in kg and height in cm, rounded to 1 decimal."""
    weight = _require_positive("weight", weight_kg)
    height_m = _require_positive("height", height_cm) / 100
    return round_half_up(weight / (height_m * height_m), 1)


def get_bmi_category(bmi: float | None) -> BMICategory:
    """Classify a BMI value; lower bounds are inclusive."""
    value = _require_positive("BMI", bmi)
    for upper_bound, category in _BMI_THRESHOLDS:
        if value < upper_bound:
            return category
    return OBESE


def get_ideal_weight_range(height_cm: float | None) -> IdealWeightRange:
    """Return the weight range giving a healthy BMI for the height."""
    height_m = _require_positive("height", height_cm) / 100
    height_sq = height_m * height_m
    return IdealWeightRange(
        min=round_half_up(HEALTHY_BMI_MIN * height_sq, 1),
        max=round_half_up(HEALTHY_BMI_MAX * height_sq, 1),
    )


def calculate_basal_metabolic_rate(profile: UserProfile) -> float:
    """Mifflin-St Jeor BMR, unrounded."""
    base = 10 * profile.weight_kg + 6.25 * profile.height_cm - 5 * profile.age
    if profile.gender == Gender.MALE:
        return base + 5
    return base - 161


def calculate_caloric_needs(
    profile: UserProfile | Mapping[str, object],
) -> CaloricPlan:
    """Return BMR, TDEE and the goal-adjusted calorie target."""
    resolved = parse_profile(profile)
    bmr = calculate_basal_metabolic_rate(resolved)
    tdee = bmr * MODERATE_ACTIVITY_MULTIPLIER
    targets = {
        Goal.WEIGHT_LOSS: round_int(tdee - WEIGHT_LOSS_DEFICIT),
        Goal.MUSCLE_GAIN: round_int(tdee + MUSCLE_GAIN_SURPLUS),
        Goal.MAINTENANCE: round_int(tdee),
    }
    recommended = targets[resolved.goal]
    return CaloricPlan(
        bmr=round_int(bmr),
        tdee=round_int(tdee),
        recommended=recommended,
        macros=calculate_macros(recommended, resolved.goal),
        weight_loss=targets[Goal.WEIGHT_LOSS],
        muscle_gain=targets[Goal.MUSCLE_GAIN],
        maintenance=targets[Goal.MAINTENANCE],
    )


def calculate_macros(calories: float, goal: Goal | str | None = None) -> MacroSplit:
    """Split daily calories into protein, carbs and fat targets."""
    total = _require_positive("calories", calories)
    protein_pct, carbs_pct, fat_pct = _MACRO_PERCENTAGES[parse_goal(goal)]
    return MacroSplit(
        protein=_macro_target(total, protein_pct, KCAL_PER_GRAM_PROTEIN),
        carbs=_macro_target(total, carbs_pct, KCAL_PER_GRAM_CARBS),
        fat=_macro_target(total, fat_pct, KCAL_PER_GRAM_FAT),
    )


def _macro_target(calories: float, percentage: int, kcal_per_gram: int) -> MacroTarget:
    share = calories * percentage / 100
    return MacroTarget(
        grams=round_int(share / kcal_per_gram),
        calories=round_int(share),
        percentage=percentage,
    )


def get_health_insights(
    profile: UserProfile | Mapping[str, object],
    trends: "TrendReport | None" = None,
    history: "Sequence[ProgressSnapshot] | None" = None,
) -> HealthInsights:
    """Combine BMI, ideal weight, caloric needs and generated insights."""
    resolved = parse_profile(profile)
    bmi = calculate_bmi(resolved.weight_kg, resolved.height_cm)
    category = get_bmi_category(bmi)
    context = InsightContext(
        profile=resolved,
        bmi_category=category,
        trends=trends,
        history=tuple(history or ()),
    )
    return HealthInsights(
        bmi=BMIReading(value=bmi, category=category),
        ideal_weight=get_ideal_weight_range(resolved.height_cm),
        caloric_needs=calculate_caloric_needs(resolved),
        insights=generate_insights(context),
    )
