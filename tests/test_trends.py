"""Tests for trend analysis and milestones."""

from datetime import datetime

import pytest

from fitness_tracker.domain.errors import DivisionByZeroError, InvalidInputError
from fitness_tracker.domain.progress import (
    InsufficientData,
    ProgressSnapshot,
    TrendReport,
)
from fitness_tracker.metrics.trends import (
    analyze_trends,
    check_milestones,
    snapshots_in_window,
    summarize_progress,
    weight_change,
)
from tests.conftest import NOW, make_snapshot


def test_analyze_trends_compares_first_and_last_snapshot() -> None:
    snapshots = [make_snapshot(14, 90, 5), make_snapshot(0, 85, 8)]

    report = analyze_trends(snapshots, 14, now=NOW)

    assert isinstance(report, TrendReport)
    assert report.weight.change == -5.0
    assert report.weight.trend == "decreasing"
    assert report.weight.weekly_average == -2.5
    assert report.energy_level.average == 6.5
    assert report.energy_level.trend == "improving"
    assert report.bmi is None


def test_analyze_trends_reports_unsigned_zero_weekly_average() -> None:
    snapshots = [make_snapshot(300, 80.1, 5), make_snapshot(0, 80.0, 5)]

    report = analyze_trends(snapshots, 365, now=NOW)

    assert isinstance(report, TrendReport)
    assert report.weight.change == -0.1
    assert str(report.weight.weekly_average) == "0.0"


def test_analyze_trends_ignores_intermediate_weights() -> None:
    snapshots = [
        make_snapshot(20, 80, 6),
        make_snapshot(10, 95, 2),
        make_snapshot(1, 80, 6),
    ]

    report = analyze_trends(snapshots, now=NOW)

    assert isinstance(report, TrendReport)
    assert report.weight.change == 0
    assert report.weight.trend == "stable"
    assert report.energy_level.trend == "stable"
    assert report.energy_level.average == 4.7


def test_analyze_trends_sorts_unordered_input() -> None:
    snapshots = [make_snapshot(0, 82, 4), make_snapshot(7, 80, 7)]

    report = analyze_trends(snapshots, 7, now=NOW)

    assert isinstance(report, TrendReport)
    assert report.weight.trend == "increasing"
    assert report.weight.weekly_average == 2.0
    assert report.energy_level.trend == "declining"


def test_analyze_trends_reports_bmi_when_both_ends_have_it() -> None:
    snapshots = [
        make_snapshot(10, 90, bmi=27.8),
        make_snapshot(0, 86, bmi=26.5),
    ]

    report = analyze_trends(snapshots, now=NOW)

    assert isinstance(report, TrendReport)
    assert report.bmi is not None
    assert report.bmi.change == -1.3
    assert report.bmi.trend == "decreasing"


@pytest.mark.parametrize(
    ("snapshots", "in_window"),
    [
        ([], 0),
        ([make_snapshot(2, 80)], 1),
        ([make_snapshot(60, 80), make_snapshot(1, 79)], 1),
    ],
)
def test_analyze_trends_returns_insufficient_data(
    snapshots: list[ProgressSnapshot], in_window: int
) -> None:
    result = analyze_trends(snapshots, now=NOW)

    assert result == InsufficientData(entries=in_window, window_days=30)


def test_analyze_trends_raises_on_zero_baseline_weight() -> None:
    snapshots = [make_snapshot(5, 0), make_snapshot(0, 80)]

    with pytest.raises(DivisionByZeroError):
        analyze_trends(snapshots, now=NOW)


@pytest.mark.parametrize("window_days", [0, -7, True, 7.5])
def test_analyze_trends_rejects_invalid_window(window_days: object) -> None:
    with pytest.raises(InvalidInputError):
        analyze_trends([make_snapshot(1, 80)], window_days, now=NOW)  # type: ignore


def test_snapshots_in_window_treats_naive_dates_as_utc() -> None:
    naive = ProgressSnapshot(date=datetime(2026, 3, 12, 12, 0), weight_kg=80)

    assert snapshots_in_window([naive], 7, now=NOW) == [naive]


def test_summarize_progress_aggregates_window() -> None:
    snapshots = [
        make_snapshot(20, 100, 4, bmi=30.9),
        make_snapshot(10, 97, 6, bmi=29.9),
        make_snapshot(0, 95, 8, bmi=29.3),
    ]

    summary = summarize_progress(snapshots, now=NOW)

    assert not isinstance(summary, InsufficientData)
    assert summary.total_entries == 3
    assert summary.weight_change == -5.0
    assert summary.weight_change_percentage == -5.0
    assert summary.bmi_change == -1.6
    assert summary.average_energy_level == 6.0
    assert summary.period == "30 days"
    assert summary.trends is not None


def test_summarize_progress_single_entry_has_no_trends() -> None:
    summary = summarize_progress([make_snapshot(1, 80)], now=NOW)

    assert not isinstance(summary, InsufficientData)
    assert summary.total_entries == 1
    assert summary.weight_change == 0
    assert summary.trends is None


def test_summarize_progress_without_entries() -> None:
    summary = summarize_progress([], 7, now=NOW)

    assert summary == InsufficientData(entries=0, window_days=7)


def test_weight_change_against_previous_entry() -> None:
    change = weight_change(make_snapshot(0, 78.5), make_snapshot(7, 80))

    assert change is not None
    assert change.amount == -1.5
    assert change.percentage == -1.9
    assert change.trend == "decrease"


def test_weight_change_maintained_and_missing_previous() -> None:
    same = weight_change(make_snapshot(0, 80), make_snapshot(1, 80))

    assert same is not None
    assert same.trend == "maintained"
    assert weight_change(make_snapshot(0, 80), None) is None


def test_check_milestones_awards_all_achievements() -> None:
    history = [make_snapshot(60, 95, bmi=29.3)]
    history += [make_snapshot(day, 92) for day in range(58, 30, -1)]
    history.append(make_snapshot(0, 88.5, bmi=27.3))

    milestones = check_milestones(history)

    assert [milestone.type for milestone in milestones] == [
        "weight_loss",
        "consistency",
        "health",
    ]
    assert milestones[0].achievement == "Lost 6.5kg total"
    assert milestones[1].achievement == "30 progress entries logged"
    assert milestones[2].icon == "heart"


def test_check_milestones_requires_two_entries() -> None:
    assert check_milestones([make_snapshot(0, 70, bmi=22.0)]) == []
