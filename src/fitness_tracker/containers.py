"""Dependency container wiring for the application."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fitness_tracker.adapters.openai_advice_client import OpenAIAdviceClient
from fitness_tracker.adapters.supabase_progress_repository import (
    SupabaseProgressRepository,
)
from fitness_tracker.adapters.supabase_user_repository import SupabaseUserRepository
from fitness_tracker.config import Settings, parse_api_key
from fitness_tracker.services.advisor import AdvisorService
from fitness_tracker.services.cache import TTLCache
from fitness_tracker.services.health import HealthService
from fitness_tracker.services.progress import ProgressService
from fitness_tracker.services.users import UserService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    user_service: UserService
    progress_service: ProgressService
    health_service: HealthService
    advisor_service: AdvisorService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    user_repository = SupabaseUserRepository(supabase_client)
    progress_repository = SupabaseProgressRepository(supabase_client)
    user_service = UserService(user_repository)
    progress_service = ProgressService(
        repository=progress_repository,
        user_service=user_service,
        window_days=resolved_settings.progress_window_days,
    )
    health_service = HealthService(
        user_service=user_service,
        progress_repository=progress_repository,
        window_days=resolved_settings.progress_window_days,
    )

    api_key = parse_api_key(resolved_settings.openai_api_key)
    advice_client = OpenAIAdviceClient.create(api_key) if api_key else None
    if advice_client is None:
        _logger.warning("OpenAI API key not configured; AI tips use fallbacks")
    advisor_service = AdvisorService(
        client=advice_client,
        model=resolved_settings.openai_model,
        cache=TTLCache(max_entries=resolved_settings.ai_cache_max_entries),
        min_interval_seconds=resolved_settings.ai_min_interval_seconds,
        retry_attempts=resolved_settings.ai_retry_attempts,
        backoff_seconds=resolved_settings.ai_backoff_seconds,
        cache_ttl_seconds=resolved_settings.ai_cache_ttl_seconds,
    )

    async def close_resources() -> None:
        if advice_client is not None:
            await advice_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_service=user_service,
        progress_service=progress_service,
        health_service=health_service,
        advisor_service=advisor_service,
        close_resources=close_resources,
    )
