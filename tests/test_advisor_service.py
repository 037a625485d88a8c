"""Tests for the AI advisor service."""

import asyncio
from dataclasses import dataclass, field

from fitness_tracker.domain.profile import Goal, UserProfile
from fitness_tracker.services.advisor import (
    DIET_FALLBACK_MESSAGE,
    FALLBACK_MESSAGE,
    FALLBACK_TIPS,
    UNAVAILABLE_MESSAGE,
    AdvisorService,
    build_tips_prompt,
    parse_advice,
    parse_tips,
)
from fitness_tracker.services.cache import TTLCache
from tests.conftest import FakeAdviceClient, FakeSleeper


class FakeMonotonic:
    def __init__(self, start: float = 100.0) -> None:
        self.value = start

    def __call__(self) -> float:
        return self.value


class AdvancingSleeper:
    """Moves the fake clock forward instead of waiting."""

    def __init__(self, clock: FakeMonotonic) -> None:
        self.clock = clock
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)
        self.clock.value += seconds
        await asyncio.sleep(0)


@dataclass
class TimedAdviceClient(FakeAdviceClient):
    """Advice client that records the clock reading of every call."""

    clock: FakeMonotonic = field(default_factory=FakeMonotonic)
    call_times: list[float] = field(default_factory=list)

    async def generate(self, *, model: str, prompt: str) -> str:
        self.call_times.append(self.clock())
        return await super().generate(model=model, prompt=prompt)


def _gaps(times: list[float]) -> list[float]:
    return [later - earlier for earlier, later in zip(times, times[1:])]


def _profile(goal: str = "muscle gain") -> UserProfile:
    return UserProfile(
        age=28, gender="male", height=178, weight=75, goal=goal, experience="novice"
    )


def _service(
    client: FakeAdviceClient | None,
    sleeper: FakeSleeper,
    clock: FakeMonotonic | None = None,
) -> AdvisorService:
    return AdvisorService(
        client=client,
        model="test-model",
        cache=TTLCache(),
        sleep=sleeper,
        clock=clock or FakeMonotonic(),
    )


def test_tips_without_client_use_fallback() -> None:
    service = _service(None, FakeSleeper())

    result = asyncio.run(service.get_fitness_tips(_profile("weight loss")))

    assert result.success is False
    assert result.message == UNAVAILABLE_MESSAGE
    assert result.tips == FALLBACK_TIPS[Goal.WEIGHT_LOSS]


def test_tips_parse_model_response() -> None:
    client = FakeAdviceClient()
    service = _service(client, FakeSleeper())

    result = asyncio.run(service.get_fitness_tips(_profile(), "knee friendly"))

    assert result.success is True
    assert result.tips == [
        "Train with compound lifts three times a week",
        "Eat protein with every meal you have",
        "Sleep at least seven hours every night",
    ]
    assert result.generated_at is not None
    assert client.prompts[0].endswith("Focus on: knee friendly")


def test_tips_retry_with_exponential_backoff_then_fall_back() -> None:
    clock = FakeMonotonic()
    client = TimedAdviceClient(
        responses=[RuntimeError("rate limited")] * 4, clock=clock
    )
    sleeper = AdvancingSleeper(clock)
    service = _service(client, sleeper, clock)

    result = asyncio.run(service.get_fitness_tips(_profile()))

    assert result.success is False
    assert result.message == FALLBACK_MESSAGE
    assert result.tips == FALLBACK_TIPS[Goal.MUSCLE_GAIN]
    assert len(client.prompts) == 4
    assert sleeper.delays == [1.0, 1.0, 2.0, 4.0]
    assert client.call_times == [100.0, 102.0, 104.0, 108.0]


def test_tips_recover_after_transient_failure() -> None:
    clock = FakeMonotonic()
    client = TimedAdviceClient(
        responses=[
            RuntimeError("timeout"),
            "Warm up for ten minutes before lifting heavy",
        ],
        clock=clock,
    )
    sleeper = AdvancingSleeper(clock)
    service = _service(client, sleeper, clock)

    result = asyncio.run(service.get_fitness_tips(_profile()))

    assert result.success is True
    assert result.tips == ["Warm up for ten minutes before lifting heavy"]
    assert _gaps(client.call_times) == [2.0]


def test_retries_respect_spacing_across_concurrent_requests() -> None:
    clock = FakeMonotonic()
    client = TimedAdviceClient(
        responses=[
            RuntimeError("overloaded"),
            "Stretch your hamstrings after every run",
            "Add one mobility session each week",
        ],
        clock=clock,
    )
    service = _service(client, AdvancingSleeper(clock), clock)

    async def scenario() -> None:
        await asyncio.gather(
            service.get_fitness_tips(_profile(), "running"),
            service.get_fitness_tips(_profile(), "mobility"),
        )

    asyncio.run(scenario())

    assert len(client.call_times) == 3
    gaps = _gaps(client.call_times)
    assert all(gap >= service.min_interval_seconds for gap in gaps)


def test_calls_are_spaced_by_min_interval() -> None:
    clock = FakeMonotonic()
    client = FakeAdviceClient()
    sleeper = AdvancingSleeper(clock)
    service = _service(client, sleeper, clock)

    async def scenario() -> None:
        await service.get_fitness_tips(_profile(), "first")
        clock.value += 0.5
        await service.get_fitness_tips(_profile(), "second")
        clock.value += 5
        await service.get_fitness_tips(_profile(), "third")

    asyncio.run(scenario())

    assert sleeper.delays == [1.5]
    assert len(client.prompts) == 3


def test_identical_requests_are_served_from_cache() -> None:
    client = FakeAdviceClient()
    service = _service(client, FakeSleeper())

    async def scenario() -> tuple[object, object]:
        first = await service.get_fitness_tips(_profile(), "core")
        second = await service.get_fitness_tips(_profile(), "core")
        return first, second

    first, second = asyncio.run(scenario())

    assert first == second
    assert len(client.prompts) == 1


def test_failures_are_not_cached() -> None:
    client = FakeAdviceClient(
        responses=[RuntimeError("down")] * 4 + ["Hydrate well throughout the day"]
    )
    service = _service(client, FakeSleeper())

    async def scenario() -> tuple[bool, bool]:
        first = await service.get_fitness_tips(_profile())
        second = await service.get_fitness_tips(_profile())
        return first.success, second.success

    assert asyncio.run(scenario()) == (False, True)


def test_diet_advice_uses_requested_goal() -> None:
    client = FakeAdviceClient(
        responses=[
            "1. Eat 2g of protein per kilogram daily\n"
            "2. Time carbohydrates around training\n"
            "3. Drink three liters of water"
        ]
    )
    service = _service(client, FakeSleeper())

    result = asyncio.run(service.get_diet_advice(_profile(), Goal.WEIGHT_LOSS))

    assert result.success is True
    assert result.tips[0] == "Eat 2g of protein per kilogram daily"
    assert len(result.tips) == 3
    assert "goal: weight loss" in client.prompts[0]


def test_diet_advice_falls_back_on_failure() -> None:
    client = FakeAdviceClient(responses=[RuntimeError("boom")])
    service = _service(client, FakeSleeper())

    result = asyncio.run(service.get_diet_advice(_profile("maintenance")))

    assert result.success is False
    assert result.message == DIET_FALLBACK_MESSAGE
    assert result.tips[0].startswith("Follow the 80/20 rule")


def test_build_tips_prompt_defaults_experience() -> None:
    profile = UserProfile(age=40, gender="female", height=160, weight=55)

    assert build_tips_prompt(profile, None) == (
        "Give 3 concise fitness tips for maintenance (beginner level). "
        "Format as: 1. tip 2. tip 3. tip"
    )


def test_parse_tips_falls_back_when_nothing_usable() -> None:
    assert parse_tips("ok. fine.") == FALLBACK_TIPS[Goal.MAINTENANCE]


def test_parse_advice_strips_bullets_and_duplicates() -> None:
    text = "- Prioritize whole foods\n- Prioritize whole foods\n* Limit added sugar"

    assert parse_advice(text) == ["Prioritize whole foods", "Limit added sugar"]
