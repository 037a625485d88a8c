"""Domain models for progress tracking."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Mood(StrEnum):
    """Self-reported mood for a progress entry."""

    EXCELLENT = "Excellent"
    GOOD = "Good"
    AVERAGE = "Average"
    POOR = "Poor"
    TERRIBLE = "Terrible"


@dataclass(frozen=True)
class Measurements:
    """Body circumference measurements in centimeters."""

    chest: float | None = None
    waist: float | None = None
    hips: float | None = None
    biceps: float | None = None
    thighs: float | None = None


@dataclass(frozen=True)
class ProgressSnapshot:
    """One dated progress log entry.

    ``bmi`` is derived once from ``weight_kg`` and ``height_cm`` when the
    entry is created; later profile height changes do not touch it.
    """

    date: datetime
    weight_kg: float
    bmi: float | None = None
    energy_level: int = 5
    body_fat_percentage: float | None = None
    muscle_mass_kg: float | None = None
    height_cm: float | None = None
    measurements: Measurements | None = None
    mood: Mood = Mood.AVERAGE
    notes: str | None = None
    id: UUID | None = None
    user_id: UUID | None = None


@dataclass(frozen=True)
class WeightTrend:
    """Weight movement between the first and last snapshot of a window."""

    change: float
    trend: str
    weekly_average: float


@dataclass(frozen=True)
class BMITrend:
    """BMI movement between the first and last snapshot of a window."""

    change: float
    trend: str


@dataclass(frozen=True)
class EnergyTrend:
    """Energy level average and direction over a window."""

    average: float
    trend: str


@dataclass(frozen=True)
class TrendReport:
    """Trends computed over a lookback window."""

    weight: WeightTrend
    bmi: BMITrend | None
    energy_level: EnergyTrend


@dataclass(frozen=True)
class InsufficientData:
    """Result returned when a window holds fewer than two snapshots."""

    entries: int
    window_days: int
    message: str = "No progress data found for the specified period"


@dataclass(frozen=True)
class WeightChange:
    """Weight change relative to a previous entry."""

    amount: float
    percentage: float
    trend: str


@dataclass(frozen=True)
class Milestone:
    """An achievement unlocked by a user's progress history."""

    type: str
    achievement: str
    icon: str


@dataclass(frozen=True)
class ProgressSummary:
    """Aggregated view of progress over a window."""

    total_entries: int
    weight_change: float
    weight_change_percentage: float
    bmi_change: float | None
    average_energy_level: float
    period: str
    trends: TrendReport | None = None
    insights: list[str] = field(default_factory=list)
    milestones: list[Milestone] = field(default_factory=list)
