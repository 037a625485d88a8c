"""Progress logging and analytics service."""

import logging
import math
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID

from fitness_tracker.domain.errors import DuplicateEntryError, NotFoundError
from fitness_tracker.domain.metrics import BMICategory
from fitness_tracker.domain.progress import (
    InsufficientData,
    Milestone,
    ProgressSnapshot,
    ProgressSummary,
    TrendReport,
    WeightChange,
)
from fitness_tracker.metrics.engine import calculate_bmi, get_bmi_category
from fitness_tracker.metrics.insights import InsightContext, generate_insights
from fitness_tracker.metrics.trends import (
    DEFAULT_WINDOW_DAYS,
    analyze_trends,
    check_milestones,
    snapshots_in_window,
    summarize_progress,
    weight_change,
)
from fitness_tracker.services.users import UserService

_logger = logging.getLogger(__name__)


class ProgressRepository(Protocol):
    """Persistence interface for progress entries."""

    def create_entry(
        self, user_id: UUID, payload: dict[str, object]
    ) -> ProgressSnapshot:
        """Insert an entry and return it."""

    def get_entry(self, user_id: UUID, entry_id: UUID) -> ProgressSnapshot | None:
        """Return an entry owned by the user, if present."""

    def list_entries(  # noqa: PLR0913
        self,
        user_id: UUID,
        start: datetime | None = None,
        end: datetime | None = None,
        *,
        descending: bool = False,
        limit: int | None = None,
        offset: int = 0,
    ) -> list[ProgressSnapshot]:
        """Return entries dated within [start, end) ordered by date."""

    def count_entries(
        self, user_id: UUID, start: datetime | None = None, end: datetime | None = None
    ) -> int:
        """Return the number of entries dated within [start, end)."""

    def get_previous_entry(
        self, user_id: UUID, before: datetime
    ) -> ProgressSnapshot | None:
        """Return the latest entry dated strictly before a timestamp."""

    def update_entry(
        self, entry_id: UUID, payload: dict[str, object]
    ) -> ProgressSnapshot:
        """Apply field updates and return the stored entry."""

    def delete_entry(self, entry_id: UUID) -> None:
        """Delete an entry."""


@dataclass(frozen=True)
class ProgressEntryView:
    """A stored entry enriched with its category and change from the last one."""

    snapshot: ProgressSnapshot
    bmi_category: BMICategory | None
    weight_change: WeightChange | None


@dataclass(frozen=True)
class ProgressPage:
    """One page of progress history."""

    entries: list[ProgressEntryView]
    total: int
    page: int
    pages: int


@dataclass(frozen=True)
class ProgressCharts:
    """Progress data arranged as chart series."""

    period: str
    data_points: int
    weight: list[dict[str, object]] = field(default_factory=list)
    body_composition: list[dict[str, object]] = field(default_factory=list)
    mood_energy: list[dict[str, object]] = field(default_factory=list)
    measurements: list[dict[str, object]] = field(default_factory=list)
    trends: TrendReport | None = None


@dataclass
class ProgressService:
    """Service for logging progress and computing trends."""

    repository: ProgressRepository
    user_service: UserService
    window_days: int = DEFAULT_WINDOW_DAYS

    def log_progress(
        self,
        user_id: UUID,
        payload: dict[str, object],
        now: datetime | None = None,
    ) -> ProgressEntryView:
        """Store a new entry with BMI derived from the user's current height."""
        user = self.user_service.get_user(user_id)
        current = now or datetime.now(tz=UTC)
        entry_date = payload.get("date")
        if entry_date is None:
            start = current.replace(hour=0, minute=0, second=0, microsecond=0)
            existing = self.repository.list_entries(
                user_id, start, start + timedelta(days=1), limit=1
            )
            if existing:
                raise DuplicateEntryError(existing[0].id)
            entry_date = current

        weight_kg = float(payload["weight_kg"])
        record = {
            **payload,
            "date": entry_date,
            "weight_kg": weight_kg,
            "height_cm": user.height_cm,
            "bmi": calculate_bmi(weight_kg, user.height_cm),
        }
        snapshot = self.repository.create_entry(user_id, record)
        _logger.info("Logged progress entry %s for user %s", snapshot.id, user_id)
        return self._view(user_id, snapshot)

    def get_history(  # noqa: PLR0913
        self,
        user_id: UUID,
        page: int = 1,
        limit: int = 20,
        start: datetime | None = None,
        end: datetime | None = None,
        descending: bool = True,
    ) -> ProgressPage:
        """Return a page of entries with per-entry weight changes."""
        self.user_service.get_user(user_id)
        entries = self.repository.list_entries(
            user_id,
            start,
            end,
            descending=descending,
            limit=limit,
            offset=(page - 1) * limit,
        )
        total = self.repository.count_entries(user_id, start, end)
        return ProgressPage(
            entries=[self._view(user_id, entry) for entry in entries],
            total=total,
            page=page,
            pages=math.ceil(total / limit) if limit else 0,
        )

    def get_summary(
        self,
        user_id: UUID,
        days: int | None = None,
        now: datetime | None = None,
    ) -> ProgressSummary | InsufficientData:
        """Summarize the window with trends, insights and milestones."""
        user = self.user_service.get_user(user_id)
        window = self.window_days if days is None else days
        history = self.repository.list_entries(user_id)
        summary = summarize_progress(history, window, now)
        if isinstance(summary, InsufficientData):
            return summary

        latest = history[-1] if history else None
        bmi_value = latest.bmi if latest and latest.bmi else None
        profile = user.to_profile()
        category = get_bmi_category(
            bmi_value or calculate_bmi(profile.weight_kg, profile.height_cm)
        )
        context = InsightContext(
            profile=profile,
            bmi_category=category,
            trends=summary.trends,
            history=tuple(history),
        )
        return replace(
            summary,
            insights=generate_insights(context),
            milestones=self.get_milestones(user_id, history),
        )

    def get_milestones(
        self, user_id: UUID, history: list[ProgressSnapshot] | None = None
    ) -> list[Milestone]:
        """Return achievements across the user's full history."""
        if history is None:
            history = self.repository.list_entries(user_id)
        return check_milestones(history)

    def get_charts(
        self,
        user_id: UUID,
        days: int = 90,
        now: datetime | None = None,
    ) -> ProgressCharts:
        """Return chart series for the window."""
        self.user_service.get_user(user_id)
        entries = snapshots_in_window(self.repository.list_entries(user_id), days, now)
        trends = analyze_trends(entries, days, now)
        return ProgressCharts(
            period=f"{days} days",
            data_points=len(entries),
            weight=[
                {"date": entry.date, "value": entry.weight_kg, "bmi": entry.bmi}
                for entry in entries
            ],
            body_composition=[
                {
                    "date": entry.date,
                    "body_fat": entry.body_fat_percentage,
                    "muscle_mass": entry.muscle_mass_kg,
                }
                for entry in entries
                if entry.body_fat_percentage or entry.muscle_mass_kg
            ],
            mood_energy=[
                {
                    "date": entry.date,
                    "mood": entry.mood,
                    "energy_level": entry.energy_level,
                }
                for entry in entries
            ],
            measurements=[
                {"date": entry.date, "measurements": entry.measurements}
                for entry in entries
                if entry.measurements
            ],
            trends=trends if isinstance(trends, TrendReport) else None,
        )

    def update_entry(
        self, user_id: UUID, entry_id: UUID, payload: dict[str, object]
    ) -> ProgressEntryView:
        """Update an entry; BMI follows weight using the entry's own height."""
        current = self._require_entry(user_id, entry_id)
        changes = dict(payload)
        if "weight_kg" in changes:
            weight_kg = float(changes["weight_kg"])
            changes["weight_kg"] = weight_kg
            if current.height_cm:
                changes["bmi"] = calculate_bmi(weight_kg, current.height_cm)
        updated = self.repository.update_entry(entry_id, changes)
        return self._view(user_id, updated)

    def delete_entry(self, user_id: UUID, entry_id: UUID) -> None:
        """Delete an entry owned by the user."""
        self._require_entry(user_id, entry_id)
        self.repository.delete_entry(entry_id)
        _logger.info("Deleted progress entry %s for user %s", entry_id, user_id)

    def _require_entry(self, user_id: UUID, entry_id: UUID) -> ProgressSnapshot:
        entry = self.repository.get_entry(user_id, entry_id)
        if entry is None:
            raise NotFoundError(f"Progress entry {entry_id} not found")
        return entry

    def _view(self, user_id: UUID, snapshot: ProgressSnapshot) -> ProgressEntryView:
        previous = self.repository.get_previous_entry(user_id, snapshot.date)
        return ProgressEntryView(
            snapshot=snapshot,
            bmi_category=get_bmi_category(snapshot.bmi) if snapshot.bmi else None,
            weight_change=weight_change(snapshot, previous),
        )
