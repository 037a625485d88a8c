"""Progress trend analysis over a lookback window.

Trends compare only the first and last snapshot inside the window; the
energy level average is the one figure that uses every snapshot.
"""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from fitness_tracker.domain.errors import DivisionByZeroError, InvalidInputError
from fitness_tracker.domain.progress import (
    BMITrend,
    EnergyTrend,
    InsufficientData,
    Milestone,
    ProgressSnapshot,
    ProgressSummary,
    TrendReport,
    WeightChange,
    WeightTrend,
)
from fitness_tracker.metrics.rounding import round_half_up

DEFAULT_WINDOW_DAYS = 30
OPTIMAL_BMI = 22.5
MILESTONE_WEIGHT_LOSS_KG = 5
MILESTONE_ENTRY_COUNT = 30


def analyze_trends(
    snapshots: Sequence[ProgressSnapshot],
    window_days: int = DEFAULT_WINDOW_DAYS,
    now: datetime | None = None,
) -> TrendReport | InsufficientData:
    """Return weight, BMI and energy trends for the window."""
    entries = snapshots_in_window(snapshots, window_days, now)
    if len(entries) < 2:
        return InsufficientData(entries=len(entries), window_days=window_days)

    first, last = entries[0], entries[-1]
    _require_baseline(first.weight_kg)
    weight_delta = last.weight_kg - first.weight_kg
    weight = WeightTrend(
        change=round_half_up(weight_delta, 1),
        trend=_direction(weight_delta, "increasing", "decreasing"),
        weekly_average=round_half_up(weight_delta / (window_days / 7), 1),
    )

    bmi = None
    if first.bmi is not None and last.bmi is not None:
        bmi_delta = last.bmi - first.bmi
        bmi = BMITrend(
            change=round_half_up(bmi_delta, 1),
            trend=_direction(bmi_delta, "increasing", "decreasing"),
        )

    energy = EnergyTrend(
        average=_average_energy(entries),
        trend=_direction(
            last.energy_level - first.energy_level, "improving", "declining"
        ),
    )
    return TrendReport(weight=weight, bmi=bmi, energy_level=energy)


def summarize_progress(
    snapshots: Sequence[ProgressSnapshot],
    window_days: int = DEFAULT_WINDOW_DAYS,
    now: datetime | None = None,
) -> ProgressSummary | InsufficientData:
    """Aggregate the window into totals and first-to-last changes."""
    entries = snapshots_in_window(snapshots, window_days, now)
    if not entries:
        return InsufficientData(entries=0, window_days=window_days)

    first, last = entries[0], entries[-1]
    _require_baseline(first.weight_kg)
    weight_delta = last.weight_kg - first.weight_kg
    bmi_change = None
    if first.bmi is not None and last.bmi is not None:
        bmi_change = round_half_up(last.bmi - first.bmi, 1)

    trends = analyze_trends(entries, window_days, now)
    return ProgressSummary(
        total_entries=len(entries),
        weight_change=round_half_up(weight_delta, 1),
        weight_change_percentage=round_half_up(
            weight_delta / first.weight_kg * 100, 1
        ),
        bmi_change=bmi_change,
        average_energy_level=_average_energy(entries),
        period=f"{window_days} days",
        trends=trends if isinstance(trends, TrendReport) else None,
    )


def weight_change(
    current: ProgressSnapshot, previous: ProgressSnapshot | None
) -> WeightChange | None:
    """Return the change from the previous entry, if there is one."""
    if previous is None:
        return None
    _require_baseline(previous.weight_kg)
    delta = current.weight_kg - previous.weight_kg
    return WeightChange(
        amount=round_half_up(delta, 1),
        percentage=round_half_up(delta / previous.weight_kg * 100, 1),
        trend=_direction(delta, "increase", "decrease", "maintained"),
    )


def check_milestones(history: Sequence[ProgressSnapshot]) -> list[Milestone]:
    """Return achievements earned across a user's full history."""
    if len(history) < 2:
        return []

    ordered = sorted(history, key=lambda entry: _as_utc(entry.date))
    earliest, latest = ordered[0], ordered[-1]
    milestones = []

    total_change = latest.weight_kg - earliest.weight_kg
    if total_change <= -MILESTONE_WEIGHT_LOSS_KG:
        milestones.append(
            Milestone(
                type="weight_loss",
                achievement=f"Lost {abs(total_change):.1f}kg total",
                icon="trophy",
            )
        )

    if len(ordered) >= MILESTONE_ENTRY_COUNT:
        milestones.append(
            Milestone(
                type="consistency",
                achievement=f"{len(ordered)} progress entries logged",
                icon="chart",
            )
        )

    if earliest.bmi and latest.bmi:
        if abs(latest.bmi - OPTIMAL_BMI) < abs(earliest.bmi - OPTIMAL_BMI):
            milestones.append(
                Milestone(
                    type="health",
                    achievement="BMI moving towards optimal range",
                    icon="heart",
                )
            )

    return milestones


def snapshots_in_window(
    snapshots: Sequence[ProgressSnapshot],
    window_days: int,
    now: datetime | None = None,
) -> list[ProgressSnapshot]:
    """Return snapshots dated within the window, oldest first."""
    if isinstance(window_days, bool) or not isinstance(window_days, int):
        raise InvalidInputError(f"Invalid window size: {window_days!r}")
    if window_days <= 0:
        raise InvalidInputError(f"Invalid window size: {window_days!r}")
    reference = _as_utc(now) if now else datetime.now(tz=UTC)
    cutoff = reference - timedelta(days=window_days)
    entries = [entry for entry in snapshots if _as_utc(entry.date) >= cutoff]
    return sorted(entries, key=lambda entry: _as_utc(entry.date))


def _require_baseline(weight_kg: float) -> None:
    if weight_kg == 0:
        raise DivisionByZeroError("Baseline weight is zero")


def _average_energy(entries: Sequence[ProgressSnapshot]) -> float:
    total = sum(entry.energy_level for entry in entries)
    return round_half_up(total / len(entries), 1)


def _direction(
    delta: float, rising: str, falling: str, unchanged: str = "stable"
) -> str:
    if delta > 0:
        return rising
    if delta < 0:
        return falling
    return unchanged


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value
