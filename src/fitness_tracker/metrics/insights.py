"""Rule-based textual insights.

Rules are independent predicate/message pairs evaluated in a fixed order.
Every rule that applies contributes its message; there is no first-match
short circuit.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from fitness_tracker.domain.metrics import BMICategory
from fitness_tracker.domain.profile import Goal, UserProfile
from fitness_tracker.domain.progress import ProgressSnapshot, TrendReport
from fitness_tracker.metrics.trends import check_milestones

NORMAL_WEIGHT = "Normal weight"
UNDERWEIGHT = "Underweight"
SIGNIFICANT_WEIGHT_CHANGE_KG = 2
HIGH_ENERGY = 7
LOW_ENERGY = 4
OLDER_ADULT_AGE = 40
YOUNG_ADULT_AGE = 25


@dataclass(frozen=True)
class InsightContext:
    """Inputs available to insight rules."""

    profile: UserProfile
    bmi_category: BMICategory
    trends: TrendReport | None = None
    history: Sequence[ProgressSnapshot] = field(default_factory=tuple)


@dataclass(frozen=True)
class InsightRule:
    """A named predicate and the messages it produces when it applies."""

    name: str
    applies: Callable[[InsightContext], bool]
    messages: Callable[[InsightContext], list[str]]


def _fixed(text: str) -> Callable[[InsightContext], list[str]]:
    return lambda _context: [text]


def _is_normal_weight(context: InsightContext) -> bool:
    return context.bmi_category.category == NORMAL_WEIGHT


def _weight_dropping(context: InsightContext) -> bool:
    trends = context.trends
    return (
        trends is not None
        and trends.weight.trend == "decreasing"
        and trends.weight.change < -SIGNIFICANT_WEIGHT_CHANGE_KG
    )


def _weight_climbing(context: InsightContext) -> bool:
    trends = context.trends
    return (
        trends is not None
        and trends.weight.trend == "increasing"
        and trends.weight.change > SIGNIFICANT_WEIGHT_CHANGE_KG
    )


def _milestone_messages(context: InsightContext) -> list[str]:
    return [
        f"Milestone reached: {milestone.achievement}"
        for milestone in check_milestones(context.history)
    ]


INSIGHT_RULES: tuple[InsightRule, ...] = (
    InsightRule(
        name="bmi_healthy",
        applies=_is_normal_weight,
        messages=_fixed("Your BMI is in the healthy range - great job!"),
    ),
    InsightRule(
        name="bmi_caution",
        applies=lambda context: not _is_normal_weight(context),
        messages=lambda context: [
            f"Your BMI indicates {context.bmi_category.category.lower()}"
            " - consider the recommendations provided."
        ],
    ),
    InsightRule(
        name="weight_loss_at_healthy_bmi",
        applies=lambda context: (
            context.profile.goal == Goal.WEIGHT_LOSS and _is_normal_weight(context)
        ),
        messages=_fixed(
            "Since you're in a healthy weight range, focus on body composition "
            "rather than just weight loss."
        ),
    ),
    InsightRule(
        name="muscle_gain_when_underweight",
        applies=lambda context: (
            context.profile.goal == Goal.MUSCLE_GAIN
            and context.bmi_category.category == UNDERWEIGHT
        ),
        messages=_fixed(
            "Perfect goal choice! Building muscle will help you reach a "
            "healthier weight."
        ),
    ),
    InsightRule(
        name="age_over_40",
        applies=lambda context: context.profile.age > OLDER_ADULT_AGE,
        messages=_fixed(
            "Include strength training to maintain muscle mass and bone density "
            "as you age."
        ),
    ),
    InsightRule(
        name="age_under_25",
        applies=lambda context: context.profile.age < YOUNG_ADULT_AGE,
        messages=_fixed(
            "Take advantage of your natural metabolism - establish healthy "
            "habits now!"
        ),
    ),
    InsightRule(
        name="weight_dropping",
        applies=_weight_dropping,
        messages=_fixed("Great progress! You're losing weight consistently."),
    ),
    InsightRule(
        name="weight_climbing",
        applies=_weight_climbing,
        messages=_fixed(
            "Weight is trending upward. Consider reviewing your diet and exercise."
        ),
    ),
    InsightRule(
        name="energy_high",
        applies=lambda context: (
            context.trends is not None
            and context.trends.energy_level.average >= HIGH_ENERGY
        ),
        messages=_fixed("Your energy levels are excellent! Keep up the good work."),
    ),
    InsightRule(
        name="energy_low",
        applies=lambda context: (
            context.trends is not None
            and context.trends.energy_level.average <= LOW_ENERGY
        ),
        messages=_fixed(
            "Energy levels seem low. Consider sleep, nutrition, and recovery."
        ),
    ),
    InsightRule(
        name="milestones",
        applies=lambda context: len(context.history) >= 2,
        messages=_milestone_messages,
    ),
)


def generate_insights(
    context: InsightContext, rules: Sequence[InsightRule] = INSIGHT_RULES
) -> list[str]:
    """Evaluate every rule in order and collect the messages of those that apply."""
    insights: list[str] = []
    for rule in rules:
        if rule.applies(context):
            insights.extend(rule.messages(context))
    return insights
