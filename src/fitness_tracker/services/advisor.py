"""AI fitness advice with rate spacing, retries and static fallbacks."""

import asyncio
import logging
import re
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Protocol

from fitness_tracker.domain.advice import AdviceResult
from fitness_tracker.domain.profile import Goal, UserProfile
from fitness_tracker.services.cache import Cache

_logger = logging.getLogger(__name__)

UNAVAILABLE_MESSAGE = "AI service is not available. Please configure an API key."
FALLBACK_MESSAGE = "AI tips temporarily unavailable. Using expert recommendations."
DIET_FALLBACK_MESSAGE = "Unable to generate diet advice"

FALLBACK_TIPS: dict[Goal, list[str]] = {
    Goal.WEIGHT_LOSS: [
        "Create a moderate caloric deficit of 300-500 calories per day",
        "Focus on high-protein foods to maintain muscle mass",
        "Incorporate both cardio and strength training",
        "Stay hydrated and drink water before meals",
        "Get adequate sleep to regulate hunger hormones",
    ],
    Goal.MUSCLE_GAIN: [
        "Eat in a slight caloric surplus with adequate protein",
        "Focus on compound exercises like squats, deadlifts, and bench press",
        "Progressive overload is key - gradually increase weight or reps",
        "Allow proper rest between training sessions",
        "Consume protein within 30 minutes post-workout",
    ],
    Goal.MAINTENANCE: [
        "Maintain a balanced diet with all macronutrients",
        "Mix different types of exercise for overall fitness",
        "Focus on consistency rather than intensity",
        "Listen to your body and adjust as needed",
        "Regular health check-ups and assessments",
    ],
}

FALLBACK_DIET_ADVICE: dict[Goal, list[str]] = {
    Goal.WEIGHT_LOSS: [
        "Reduce portion sizes and eat slowly",
        "Choose lean proteins and fiber-rich foods",
        "Limit processed foods and sugary drinks",
        "Plan meals in advance to avoid impulse eating",
    ],
    Goal.MUSCLE_GAIN: [
        "Increase protein intake to 1.6-2.2g per kg body weight",
        "Eat frequent meals throughout the day",
        "Include complex carbohydrates around workouts",
        "Don't forget healthy fats for hormone production",
    ],
    Goal.MAINTENANCE: [
        "Follow the 80/20 rule - healthy choices 80% of the time",
        "Include variety in your diet for all nutrients",
        "Stay consistent with meal timing",
        "Monitor your energy levels and adjust accordingly",
    ],
}

_BULLET_PREFIX = re.compile(r"^(\d+\.\s*|[•\-*]\s*)")


class AdviceClient(Protocol):
    """Interface for a generative text model."""

    async def generate(self, *, model: str, prompt: str) -> str:
        """Return the model's text response for a prompt."""


@dataclass
class AdvisorService:
    """Service that asks a generative model for short fitness tips."""

    client: AdviceClient | None
    model: str
    cache: Cache
    min_interval_seconds: float = 2.0
    retry_attempts: int = 3
    backoff_seconds: float = 1.0
    cache_ttl_seconds: int = 3600
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep
    clock: Callable[[], float] = time.monotonic
    _last_request_at: float | None = field(default=None, init=False, repr=False)
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock, init=False, repr=False)

    async def get_fitness_tips(
        self, profile: UserProfile, specific_request: str | None = None
    ) -> AdviceResult:
        """Return up to three tips for the profile's goal."""
        if self.client is None:
            return AdviceResult(
                success=False,
                message=UNAVAILABLE_MESSAGE,
                tips=fallback_tips(profile.goal),
            )

        cache_key = f"tips:{profile.goal}:{profile.experience}:{specific_request}"
        cached = self.cache.get(cache_key)
        if isinstance(cached, AdviceResult):
            return cached

        prompt = build_tips_prompt(profile, specific_request)
        try:
            text = await self._generate(prompt, action="tips")
        except Exception:
            _logger.warning("AI tips failed, serving fallback tips", exc_info=True)
            return AdviceResult(
                success=False,
                message=FALLBACK_MESSAGE,
                tips=fallback_tips(profile.goal),
            )

        result = AdviceResult(
            success=True,
            tips=parse_tips(text),
            generated_at=datetime.now(tz=UTC),
        )
        self.cache.set(cache_key, result, ttl_seconds=self.cache_ttl_seconds)
        return result

    async def get_diet_advice(
        self, profile: UserProfile, diet_goal: Goal | None = None
    ) -> AdviceResult:
        """Return up to seven dietary recommendations."""
        goal = diet_goal or profile.goal
        if self.client is None:
            return AdviceResult(
                success=False,
                message=UNAVAILABLE_MESSAGE,
                tips=fallback_diet_advice(goal),
            )

        cache_key = (
            f"diet:{goal}:{profile.age}:{profile.gender}:"
            f"{profile.weight_kg}:{profile.height_cm}"
        )
        cached = self.cache.get(cache_key)
        if isinstance(cached, AdviceResult):
            return cached

        try:
            text = await self._generate(build_diet_prompt(profile, goal), action="diet")
        except Exception:
            _logger.warning("AI diet advice failed, serving fallback", exc_info=True)
            return AdviceResult(
                success=False,
                message=DIET_FALLBACK_MESSAGE,
                tips=fallback_diet_advice(goal),
            )

        result = AdviceResult(
            success=True,
            tips=parse_advice(text),
            generated_at=datetime.now(tz=UTC),
        )
        self.cache.set(cache_key, result, ttl_seconds=self.cache_ttl_seconds)
        return result

    async def _generate(self, prompt: str, *, action: str) -> str:
        """Call the model, retrying with exponential backoff.

        Every attempt, retries included, waits for a spacing slot.
        """
        if self.client is None:
            raise RuntimeError("No advice client configured")
        attempt = 0
        while True:
            await self._wait_for_slot()
            try:
                return await self.client.generate(model=self.model, prompt=prompt)
            except Exception as exc:
                _logger.warning(
                    "AI %s failed (attempt %s/%s): %s",
                    action,
                    attempt + 1,
                    self.retry_attempts + 1,
                    exc,
                )
                if attempt >= self.retry_attempts:
                    raise
                await self.sleep(self.backoff_seconds * 2**attempt)
                attempt += 1

    async def _wait_for_slot(self) -> None:
        """Keep outbound calls at least min_interval_seconds apart."""
        async with self._lock:
            if self._last_request_at is not None:
                elapsed = self.clock() - self._last_request_at
                remaining = self.min_interval_seconds - elapsed
                if remaining > 0:
                    await self.sleep(remaining)
            self._last_request_at = self.clock()


def fallback_tips(goal: Goal | None) -> list[str]:
    """Return the static tips for a goal."""
    return list(FALLBACK_TIPS[goal or Goal.MAINTENANCE])


def fallback_diet_advice(goal: Goal | None) -> list[str]:
    """Return the static diet advice for a goal."""
    return list(FALLBACK_DIET_ADVICE[goal or Goal.MAINTENANCE])


def build_tips_prompt(profile: UserProfile, specific_request: str | None) -> str:
    """Build a short prompt asking for three tips."""
    experience = profile.experience or "beginner"
    prompt = (
        f"Give 3 concise fitness tips for {profile.goal} ({experience} level). "
        "Format as: 1. tip 2. tip 3. tip"
    )
    if specific_request:
        prompt += f" Focus on: {specific_request}"
    return prompt


def build_diet_prompt(profile: UserProfile, goal: Goal) -> str:
    """Build a prompt asking for dietary advice."""
    return (
        f"Provide specific dietary advice for a {profile.age}-year-old "
        f"{profile.gender} with goal: {goal}. Current weight: "
        f"{profile.weight_kg:g}kg, Height: {profile.height_cm:g}cm.\n\n"
        "Focus on:\n"
        "1. Macronutrient distribution\n"
        "2. Meal timing\n"
        "3. Food choices\n"
        "4. Hydration\n"
        "5. Supplements (if needed)\n\n"
        "Provide practical, actionable advice in 5 key points."
    )


def parse_tips(text: str, limit: int = 3) -> list[str]:
    """Extract short tips from free text, falling back to maintenance tips."""
    tips = []
    for chunk in re.split(r"[.\n]", text):
        line = _BULLET_PREFIX.sub("", chunk.strip()).strip()
        if 15 < len(line) < 150:
            tips.append(line)
            if len(tips) >= limit:
                break
    return tips or fallback_tips(Goal.MAINTENANCE)


def parse_advice(text: str, limit: int = 7) -> list[str]:
    """Extract numbered or bulleted points from a longer response."""
    tips: list[str] = []
    for raw in text.splitlines():
        line = raw.strip()
        if not line:
            continue
        cleaned = _BULLET_PREFIX.sub("", line).strip()
        if len(cleaned) > 10 and cleaned not in tips:
            tips.append(cleaned)
    if not tips:
        tips = [
            sentence.strip()
            for sentence in text.split(".")
            if len(sentence.strip()) > 20
        ]
    return tips[:limit]
