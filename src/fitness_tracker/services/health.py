"""Health insights for stored users."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from fitness_tracker.domain.metrics import HealthInsights
from fitness_tracker.domain.progress import TrendReport
from fitness_tracker.metrics.engine import get_health_insights
from fitness_tracker.metrics.trends import DEFAULT_WINDOW_DAYS, analyze_trends
from fitness_tracker.services.progress import ProgressRepository
from fitness_tracker.services.users import UserService


@dataclass
class HealthService:
    """Combines a user's profile with their progress history."""

    user_service: UserService
    progress_repository: ProgressRepository
    window_days: int = DEFAULT_WINDOW_DAYS

    def get_insights(
        self, user_id: UUID, days: int | None = None, now: datetime | None = None
    ) -> HealthInsights:
        """Return BMI, ideal weight, caloric needs and insights for a user."""
        user = self.user_service.get_user(user_id)
        history = self.progress_repository.list_entries(user_id)
        window = self.window_days if days is None else days
        trends = analyze_trends(history, window, now)
        return get_health_insights(
            user.to_profile(),
            trends=trends if isinstance(trends, TrendReport) else None,
            history=history,
        )
