"""Domain models for derived health metrics."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class BMICategory:
    """Static classification of a BMI value."""

    category: str
    status: str
    description: str
    recommendations: tuple[str, ...]


@dataclass(frozen=True)
class BMIReading:
    """A BMI value together with its category."""

    value: float
    category: BMICategory


@dataclass(frozen=True)
class IdealWeightRange:
    """Healthy weight range for a height."""

    min: float
    max: float

    @property
    def range(self) -> str:
        """Human-readable range label."""
        return f"{self.min:g} - {self.max:g} kg"


@dataclass(frozen=True)
class MacroTarget:
    """Daily target for a single macronutrient."""

    grams: int
    calories: int
    percentage: int


@dataclass(frozen=True)
class MacroSplit:
    """Daily macronutrient targets."""

    protein: MacroTarget
    carbs: MacroTarget
    fat: MacroTarget


@dataclass(frozen=True)
class CaloricPlan:
    """Energy expenditure and goal-adjusted calorie targets."""

    bmr: int
    tdee: int
    recommended: int
    macros: MacroSplit
    weight_loss: int
    muscle_gain: int
    maintenance: int


@dataclass(frozen=True)
class HealthInsights:
    """Combined health report for a user profile."""

    bmi: BMIReading
    ideal_weight: IdealWeightRange
    caloric_needs: CaloricPlan
    insights: list[str] = field(default_factory=list)
