"""Unit tests for GoalCalculationOrchestrator.

Tests focus on:
- End-to-end calculation and storage
- Freshness cache hits and recalculation on profile change
- Error taxonomy (profile, validation, calculation, storage, unexpected)
- Storage retry
- Per-user serialization of concurrent requests
- Manual and partial overrides
- Stale detection and state tracking
- Event publishing

Note: Calculators are the real services wrapped in mocks so that call
counts can be asserted.
"""

import asyncio
import gc
from dataclasses import replace
from datetime import date
from typing import List
from unittest.mock import AsyncMock, Mock

import pytest

from application.daily_goals.orchestrators.goal_calculation_orchestrator import (
    GoalCalculationOrchestrator,
    GoalCalculationResult,
    GoalState,
)
from domain.daily_goals.calculation import (
    CaloriesGoalService,
    HeartPointsGoalService,
    StepsGoalService,
)
from domain.daily_goals.core.events.goals_calculated import GoalsCalculated
from domain.daily_goals.core.exceptions.domain_errors import (
    CalculationFailedError,
    GoalErrorKind,
    GoalStorageError,
    StorageFailedError,
)
from domain.daily_goals.core.value_objects import (
    ActivityLevel,
    CalculationSource,
    Gender,
    GoalProfile,
)
from infrastructure.cache.in_memory_freshness_cache import InMemoryFreshnessCache
from infrastructure.config import GoalEngineSettings
from infrastructure.events.in_memory_bus import InMemoryEventBus
from infrastructure.persistence.in_memory.goal_repository import InMemoryGoalRepository
from infrastructure.persistence.in_memory.profile_source import InMemoryProfileSource
from metrics import daily_goals as goal_metrics
from metrics.core import registry

TODAY = date(2025, 6, 1)
USER_ID = "user123"
FAST_RETRY = GoalEngineSettings(storage_retry_min_wait_s=0, storage_retry_max_wait_s=0)


def _profile(**overrides) -> GoalProfile:
    """25-year-old male, 175 cm, 70 kg, lightly active."""
    data = dict(
        user_id=USER_ID,
        birthdate=date(2000, 1, 1),
        gender=Gender.MALE,
        height_cm=175.0,
        weight_kg=70.0,
        activity_level=ActivityLevel.LIGHT,
    )
    data.update(overrides)
    return GoalProfile(**data)


@pytest.fixture
def profile_source() -> InMemoryProfileSource:
    return InMemoryProfileSource()


@pytest.fixture
def repository() -> InMemoryGoalRepository:
    return InMemoryGoalRepository()


@pytest.fixture
def cache() -> InMemoryFreshnessCache:
    return InMemoryFreshnessCache()


@pytest.fixture
def event_bus() -> InMemoryEventBus:
    return InMemoryEventBus()


@pytest.fixture
def steps_calculator() -> Mock:
    return Mock(wraps=StepsGoalService())


@pytest.fixture
def calories_calculator() -> Mock:
    return Mock(wraps=CaloriesGoalService())


@pytest.fixture
def heart_points_calculator() -> Mock:
    return Mock(wraps=HeartPointsGoalService())


@pytest.fixture
def orchestrator(
    profile_source: InMemoryProfileSource,
    repository: InMemoryGoalRepository,
    cache: InMemoryFreshnessCache,
    steps_calculator: Mock,
    calories_calculator: Mock,
    heart_points_calculator: Mock,
    event_bus: InMemoryEventBus,
) -> GoalCalculationOrchestrator:
    return GoalCalculationOrchestrator(
        profile_source=profile_source,
        repository=repository,
        cache=cache,
        steps_calculator=steps_calculator,
        calories_calculator=calories_calculator,
        heart_points_calculator=heart_points_calculator,
        event_bus=event_bus,
        settings=FAST_RETRY,
        clock=lambda: TODAY,
    )


class TestCalculateAndStore:
    """Test the main calculation flow."""

    @pytest.mark.asyncio
    async def test_end_to_end_who_standard(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        repository: InMemoryGoalRepository,
    ) -> None:
        """Male, 25, 175 cm, 70 kg, light activity."""
        await profile_source.save_profile(_profile())

        result = await orchestrator.calculate_and_store(USER_ID)

        assert result.is_success
        assert result.is_durable
        assert result.was_recalculated
        assert result.error is None
        goals = result.goals
        assert goals is not None
        assert goals.steps_goal == 10500
        assert goals.calories_goal == 2371
        assert goals.heart_points_goal == 20
        assert goals.calculation_source == CalculationSource.WHO_STANDARD
        assert goals.is_valid
        assert goals.is_fresh
        assert await repository.find_by_user_id(USER_ID) == goals

    @pytest.mark.asyncio
    async def test_fingerprint_stored_with_goals(
        self, orchestrator: GoalCalculationOrchestrator, profile_source: InMemoryProfileSource
    ) -> None:
        profile = _profile()
        await profile_source.save_profile(profile)

        result = await orchestrator.calculate_and_store(USER_ID)

        assert result.goals is not None
        assert result.goals.profile_fingerprint == profile.fingerprint(TODAY).value

    @pytest.mark.asyncio
    async def test_cache_hit_skips_calculation(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        repository: InMemoryGoalRepository,
        steps_calculator: Mock,
    ) -> None:
        await profile_source.save_profile(_profile())

        first = await orchestrator.calculate_and_store(USER_ID)
        second = await orchestrator.calculate_and_store(USER_ID)

        assert second.is_success
        assert not second.was_recalculated
        assert second.goals == first.goals
        assert steps_calculator.breakdown.call_count == 1
        assert len(await repository.history(USER_ID)) == 1
        assert registry.counter_value(goal_metrics.CACHE_COUNTER, result="hit") == 1
        assert registry.counter_value(goal_metrics.CACHE_COUNTER, result="miss") == 1

    @pytest.mark.asyncio
    async def test_force_recalculation_bypasses_cache(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        repository: InMemoryGoalRepository,
        steps_calculator: Mock,
    ) -> None:
        await profile_source.save_profile(_profile())

        await orchestrator.calculate_and_store(USER_ID)
        result = await orchestrator.calculate_and_store(USER_ID, force_recalculation=True)

        assert result.was_recalculated
        assert steps_calculator.breakdown.call_count == 2
        assert len(await repository.history(USER_ID)) == 2

    @pytest.mark.asyncio
    async def test_profile_change_triggers_recalculation(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        calories_calculator: Mock,
    ) -> None:
        await profile_source.save_profile(_profile())
        first = await orchestrator.calculate_and_store(USER_ID)

        await profile_source.save_profile(_profile(weight_kg=80.0))
        second = await orchestrator.calculate_and_store(USER_ID)

        assert second.was_recalculated
        assert calories_calculator.breakdown.call_count == 2
        assert first.goals is not None and second.goals is not None
        assert second.goals.calories_goal > first.goals.calories_goal
        assert second.goals.profile_fingerprint != first.goals.profile_fingerprint

    @pytest.mark.asyncio
    async def test_superseded_goals_kept_in_history(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        repository: InMemoryGoalRepository,
    ) -> None:
        await profile_source.save_profile(_profile())
        await orchestrator.calculate_and_store(USER_ID)
        await profile_source.save_profile(_profile(activity_level=ActivityLevel.ACTIVE))
        await orchestrator.calculate_and_store(USER_ID)

        history = await repository.history(USER_ID)

        assert len(history) == 2
        assert history[-1] == await repository.find_by_user_id(USER_ID)

    @pytest.mark.asyncio
    async def test_users_are_independent(
        self, orchestrator: GoalCalculationOrchestrator, profile_source: InMemoryProfileSource
    ) -> None:
        await profile_source.save_profile(_profile())
        await profile_source.save_profile(_profile(user_id="other", gender=Gender.FEMALE))

        mine = await orchestrator.calculate_and_store(USER_ID)
        theirs = await orchestrator.calculate_and_store("other")

        assert mine.goals is not None and theirs.goals is not None
        assert theirs.goals.user_id == "other"
        assert theirs.goals.steps_goal == 9500
        assert mine.goals.steps_goal == 10500


class TestCalculationErrors:
    """Test the error taxonomy returned in results."""

    @pytest.mark.asyncio
    async def test_profile_not_found(
        self, orchestrator: GoalCalculationOrchestrator, steps_calculator: Mock
    ) -> None:
        result = await orchestrator.calculate_and_store("ghost")

        assert not result.is_success
        assert result.goals is None
        assert result.error is not None
        assert result.error.kind == GoalErrorKind.PROFILE_NOT_FOUND
        assert not result.error.retryable
        assert steps_calculator.breakdown.call_count == 0
        assert orchestrator.state_of("ghost") == GoalState.FAILED

    @pytest.mark.asyncio
    async def test_invalid_height_fails_validation_without_calculating(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        repository: InMemoryGoalRepository,
        steps_calculator: Mock,
        calories_calculator: Mock,
        heart_points_calculator: Mock,
    ) -> None:
        await profile_source.save_profile(_profile(height_cm=-1.0))

        result = await orchestrator.calculate_and_store(USER_ID)

        assert result.error is not None
        assert result.error.kind == GoalErrorKind.VALIDATION_FAILED
        assert any("Height" in issue for issue in result.error.issues)
        assert result.goals is None
        assert result.fallback_goals is None
        assert steps_calculator.breakdown.call_count == 0
        assert calories_calculator.breakdown.call_count == 0
        assert heart_points_calculator.breakdown.call_count == 0
        assert repository.count() == 0

    @pytest.mark.asyncio
    async def test_missing_birthdate_fails_validation(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        steps_calculator: Mock,
    ) -> None:
        await profile_source.save_profile(_profile(birthdate=None))

        result = await orchestrator.calculate_and_store(USER_ID)

        assert result.error is not None
        assert result.error.kind == GoalErrorKind.VALIDATION_FAILED
        assert any("Birthdate" in issue for issue in result.error.issues)
        assert steps_calculator.breakdown.call_count == 0
        assert orchestrator.state_of(USER_ID) == GoalState.FAILED

    @pytest.mark.asyncio
    async def test_calculator_failure_returns_fallback(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        repository: InMemoryGoalRepository,
        cache: InMemoryFreshnessCache,
        calories_calculator: Mock,
    ) -> None:
        await profile_source.save_profile(_profile())
        calories_calculator.breakdown.side_effect = ZeroDivisionError("division by zero")

        result = await orchestrator.calculate_and_store(USER_ID)

        assert isinstance(result.error, CalculationFailedError)
        assert result.error.retryable
        assert isinstance(result.error.cause, ZeroDivisionError)
        assert result.goals is None
        assert result.fallback_goals is not None
        assert result.fallback_goals.calculation_source == CalculationSource.FALLBACK_DEFAULT
        assert not result.is_durable
        assert repository.count() == 0
        assert cache.size() == 0
        assert (
            registry.counter_value(
                goal_metrics.FALLBACK_COUNTER, reason="Mathematical calculation error"
            )
            == 1
        )

    @pytest.mark.asyncio
    async def test_storage_failure_returns_goals_but_not_durable(
        self,
        profile_source: InMemoryProfileSource,
        cache: InMemoryFreshnessCache,
        steps_calculator: Mock,
        calories_calculator: Mock,
        heart_points_calculator: Mock,
    ) -> None:
        repository = Mock()
        repository.save = AsyncMock(side_effect=GoalStorageError("connection refused"))
        repository.find_by_user_id = AsyncMock(return_value=None)
        orchestrator = GoalCalculationOrchestrator(
            profile_source=profile_source,
            repository=repository,
            cache=cache,
            steps_calculator=steps_calculator,
            calories_calculator=calories_calculator,
            heart_points_calculator=heart_points_calculator,
            settings=FAST_RETRY,
            clock=lambda: TODAY,
        )
        await profile_source.save_profile(_profile())

        result = await orchestrator.calculate_and_store(USER_ID)

        assert isinstance(result.error, StorageFailedError)
        assert result.error.retryable
        assert result.goals is not None
        assert result.goals.steps_goal == 10500
        assert result.was_recalculated
        assert not result.is_success
        assert not result.is_durable
        assert repository.save.await_count == FAST_RETRY.storage_retry_attempts
        assert cache.size() == 0
        assert orchestrator.state_of(USER_ID) == GoalState.FAILED

        # Nothing was cached, so the next call computes again
        await orchestrator.calculate_and_store(USER_ID)
        assert steps_calculator.breakdown.call_count == 2

    @pytest.mark.asyncio
    async def test_transient_storage_failure_is_retried(
        self,
        profile_source: InMemoryProfileSource,
        cache: InMemoryFreshnessCache,
    ) -> None:
        repository = Mock()
        repository.save = AsyncMock(side_effect=[GoalStorageError("timeout"), None])
        orchestrator = GoalCalculationOrchestrator(
            profile_source=profile_source,
            repository=repository,
            cache=cache,
            steps_calculator=StepsGoalService(),
            calories_calculator=CaloriesGoalService(),
            heart_points_calculator=HeartPointsGoalService(),
            settings=FAST_RETRY,
            clock=lambda: TODAY,
        )
        await profile_source.save_profile(_profile())

        result = await orchestrator.calculate_and_store(USER_ID)

        assert result.is_success
        assert repository.save.await_count == 2
        assert cache.size() == 1

    @pytest.mark.asyncio
    async def test_unexpected_error_is_captured(
        self, repository: InMemoryGoalRepository, cache: InMemoryFreshnessCache
    ) -> None:
        profile_source = Mock()
        profile_source.get_profile = AsyncMock(side_effect=RuntimeError("source down"))
        orchestrator = GoalCalculationOrchestrator(
            profile_source=profile_source,
            repository=repository,
            cache=cache,
            steps_calculator=StepsGoalService(),
            calories_calculator=CaloriesGoalService(),
            heart_points_calculator=HeartPointsGoalService(),
            settings=FAST_RETRY,
            clock=lambda: TODAY,
        )

        result = await orchestrator.calculate_and_store(USER_ID)

        assert result.error is not None
        assert result.error.kind == GoalErrorKind.UNEXPECTED_ERROR
        assert "source down" in str(result.error)
        assert (
            registry.counter_value(
                goal_metrics.CALCULATIONS_COUNTER, outcome="unexpected_error"
            )
            == 1
        )


class TestConcurrency:
    """Test per-user serialization."""

    @pytest.mark.asyncio
    async def test_concurrent_requests_compute_once(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        repository: InMemoryGoalRepository,
        steps_calculator: Mock,
    ) -> None:
        await profile_source.save_profile(_profile())

        results: List[GoalCalculationResult] = await asyncio.gather(
            *[orchestrator.calculate_and_store(USER_ID) for _ in range(5)]
        )

        assert all(result.is_success for result in results)
        assert sum(1 for result in results if result.was_recalculated) == 1
        assert steps_calculator.breakdown.call_count == 1
        assert len(await repository.history(USER_ID)) == 1
        assert len({result.goals for result in results}) == 1

    @pytest.mark.asyncio
    async def test_different_users_each_compute(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        steps_calculator: Mock,
    ) -> None:
        for user_id in ("a", "b", "c"):
            await profile_source.save_profile(_profile(user_id=user_id))

        results = await asyncio.gather(
            *[orchestrator.calculate_and_store(user_id) for user_id in ("a", "b", "c")]
        )

        assert all(result.was_recalculated for result in results)
        assert steps_calculator.breakdown.call_count == 3

    @pytest.mark.asyncio
    async def test_user_locks_released_after_calculation(
        self, orchestrator: GoalCalculationOrchestrator, profile_source: InMemoryProfileSource
    ) -> None:
        for user_id in ("a", "b", "c"):
            await profile_source.save_profile(_profile(user_id=user_id))

        await asyncio.gather(
            *[orchestrator.calculate_and_store(user_id) for user_id in ("a", "b", "c")]
        )
        gc.collect()

        assert len(orchestrator._locks) == 0


class TestOverrides:
    """Test user-supplied goal overrides."""

    @pytest.mark.asyncio
    async def test_all_overrides_skip_formulas(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        steps_calculator: Mock,
        calories_calculator: Mock,
        heart_points_calculator: Mock,
    ) -> None:
        await profile_source.save_profile(
            _profile(
                steps_goal_override=8000,
                calories_goal_override=2200,
                heart_points_goal_override=25,
            )
        )

        result = await orchestrator.calculate_and_store(USER_ID)

        assert result.is_success
        assert result.goals is not None
        assert result.goals.calculation_source == CalculationSource.MANUAL
        assert result.goals.steps_goal == 8000
        assert steps_calculator.breakdown.call_count == 0
        assert calories_calculator.breakdown.call_count == 0
        assert heart_points_calculator.breakdown.call_count == 0
        assert orchestrator.last_breakdown(USER_ID) is None

    @pytest.mark.asyncio
    async def test_partial_override(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        steps_calculator: Mock,
        calories_calculator: Mock,
    ) -> None:
        await profile_source.save_profile(_profile(steps_goal_override=12000))

        result = await orchestrator.calculate_and_store(USER_ID)

        assert result.goals is not None
        assert result.goals.calculation_source == CalculationSource.USER_ADJUSTED
        assert result.goals.steps_goal == 12000
        assert result.goals.calories_goal == 2371
        assert steps_calculator.breakdown.call_count == 0
        assert calories_calculator.breakdown.call_count == 1

        breakdown = orchestrator.last_breakdown(USER_ID)
        assert breakdown is not None
        assert breakdown.steps is None
        assert breakdown.overridden_components() == ["steps"]
        assert breakdown.calories.final_goal == result.goals.calories_goal
        assert breakdown.heart_points.final_goal == result.goals.heart_points_goal
        assert "Steps Goal: set by user" in breakdown.explanation()

    @pytest.mark.asyncio
    async def test_override_still_requires_valid_profile(
        self, orchestrator: GoalCalculationOrchestrator, profile_source: InMemoryProfileSource
    ) -> None:
        await profile_source.save_profile(
            _profile(
                weight_kg=0,
                steps_goal_override=8000,
                calories_goal_override=2200,
                heart_points_goal_override=25,
            )
        )

        result = await orchestrator.calculate_and_store(USER_ID)

        assert result.error is not None
        assert result.error.kind == GoalErrorKind.VALIDATION_FAILED

    @pytest.mark.asyncio
    async def test_calculation_breakdown_skips_overridden_goals(
        self, orchestrator: GoalCalculationOrchestrator, profile_source: InMemoryProfileSource
    ) -> None:
        await profile_source.save_profile(_profile(calories_goal_override=1900))

        breakdown = await orchestrator.get_calculation_breakdown(USER_ID)

        assert breakdown is not None
        assert breakdown.calories is None
        assert breakdown.steps.final_goal == 10500


class TestValidityAndStaleness:
    """Test has_valid_goals, get_current_goals and state tracking."""

    @pytest.mark.asyncio
    async def test_has_valid_goals_lifecycle(
        self, orchestrator: GoalCalculationOrchestrator, profile_source: InMemoryProfileSource
    ) -> None:
        await profile_source.save_profile(_profile())
        assert not await orchestrator.has_valid_goals(USER_ID)

        await orchestrator.calculate_and_store(USER_ID)
        assert await orchestrator.has_valid_goals(USER_ID)

        await profile_source.save_profile(_profile(height_cm=180.0))
        assert not await orchestrator.has_valid_goals(USER_ID)

    @pytest.mark.asyncio
    async def test_has_valid_goals_false_for_invalid_stored_goals(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        repository: InMemoryGoalRepository,
    ) -> None:
        await profile_source.save_profile(_profile())
        result = await orchestrator.calculate_and_store(USER_ID)
        assert result.goals is not None
        await repository.save(replace(result.goals, is_valid=False))

        assert not await orchestrator.has_valid_goals(USER_ID)

    @pytest.mark.asyncio
    async def test_has_valid_goals_false_on_repository_error(
        self, profile_source: InMemoryProfileSource, cache: InMemoryFreshnessCache
    ) -> None:
        repository = Mock()
        repository.find_by_user_id = AsyncMock(side_effect=RuntimeError("down"))
        orchestrator = GoalCalculationOrchestrator(
            profile_source=profile_source,
            repository=repository,
            cache=cache,
            steps_calculator=StepsGoalService(),
            calories_calculator=CaloriesGoalService(),
            heart_points_calculator=HeartPointsGoalService(),
            clock=lambda: TODAY,
        )

        assert not await orchestrator.has_valid_goals(USER_ID)
        assert await orchestrator.get_current_goals(USER_ID) is None

    @pytest.mark.asyncio
    async def test_get_current_goals(
        self, orchestrator: GoalCalculationOrchestrator, profile_source: InMemoryProfileSource
    ) -> None:
        assert await orchestrator.get_current_goals(USER_ID) is None

        await profile_source.save_profile(_profile())
        await orchestrator.calculate_and_store(USER_ID)

        goals = await orchestrator.get_current_goals(USER_ID)
        assert goals is not None
        assert goals.is_fresh

    @pytest.mark.asyncio
    async def test_get_current_goals_flags_stale(
        self, orchestrator: GoalCalculationOrchestrator, profile_source: InMemoryProfileSource
    ) -> None:
        await profile_source.save_profile(_profile())
        await orchestrator.calculate_and_store(USER_ID)
        assert orchestrator.state_of(USER_ID) == GoalState.STORED_FRESH

        await profile_source.save_profile(_profile(gender=Gender.FEMALE))
        goals = await orchestrator.get_current_goals(USER_ID)

        assert goals is not None
        assert not goals.is_fresh
        assert goals.steps_goal == 10500
        assert orchestrator.state_of(USER_ID) == GoalState.STORED_STALE

    @pytest.mark.asyncio
    async def test_state_starts_without_goals(self, orchestrator: GoalCalculationOrchestrator) -> None:
        assert orchestrator.state_of(USER_ID) == GoalState.NO_GOALS

    @pytest.mark.asyncio
    async def test_invalidate_forces_recalculation(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        steps_calculator: Mock,
    ) -> None:
        await profile_source.save_profile(_profile())
        await orchestrator.calculate_and_store(USER_ID)

        await orchestrator.invalidate(USER_ID)

        assert orchestrator.state_of(USER_ID) == GoalState.STORED_STALE
        result = await orchestrator.calculate_and_store(USER_ID)
        assert result.was_recalculated
        assert steps_calculator.breakdown.call_count == 2
        assert orchestrator.state_of(USER_ID) == GoalState.STORED_FRESH

    @pytest.mark.asyncio
    async def test_failure_after_success_sets_failed(
        self, orchestrator: GoalCalculationOrchestrator, profile_source: InMemoryProfileSource
    ) -> None:
        await profile_source.save_profile(_profile())
        await orchestrator.calculate_and_store(USER_ID)

        await profile_source.save_profile(_profile(weight_kg=-5.0))
        await orchestrator.calculate_and_store(USER_ID)

        assert orchestrator.state_of(USER_ID) == GoalState.FAILED


class TestBreakdown:
    """Test breakdown retrieval."""

    @pytest.mark.asyncio
    async def test_get_calculation_breakdown_does_not_store(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        repository: InMemoryGoalRepository,
    ) -> None:
        await profile_source.save_profile(_profile())

        breakdown = await orchestrator.get_calculation_breakdown(USER_ID)

        assert breakdown is not None
        assert breakdown.age == 25
        assert breakdown.steps.final_goal == 10500
        assert breakdown.calories.final_goal == 2371
        assert breakdown.heart_points.final_goal == 20
        assert "Daily Goals Calculation Summary" in breakdown.explanation()
        assert repository.count() == 0

    @pytest.mark.asyncio
    async def test_breakdown_missing_or_invalid_profile(
        self, orchestrator: GoalCalculationOrchestrator, profile_source: InMemoryProfileSource
    ) -> None:
        assert await orchestrator.get_calculation_breakdown(USER_ID) is None

        await profile_source.save_profile(_profile(height_cm=0))
        assert await orchestrator.get_calculation_breakdown(USER_ID) is None

    @pytest.mark.asyncio
    async def test_last_breakdown_after_calculation(
        self, orchestrator: GoalCalculationOrchestrator, profile_source: InMemoryProfileSource
    ) -> None:
        await profile_source.save_profile(_profile())
        assert orchestrator.last_breakdown(USER_ID) is None

        await orchestrator.calculate_and_store(USER_ID)

        breakdown = orchestrator.last_breakdown(USER_ID)
        assert breakdown is not None
        assert breakdown.calories.equation.startswith("Harris-Benedict")


class TestEvents:
    """Test GoalsCalculated publishing."""

    @pytest.mark.asyncio
    async def test_event_published_on_store(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        event_bus: InMemoryEventBus,
    ) -> None:
        received: List[GoalsCalculated] = []

        async def handler(event: GoalsCalculated) -> None:
            received.append(event)

        event_bus.subscribe(GoalsCalculated, handler)
        await profile_source.save_profile(_profile())

        await orchestrator.calculate_and_store(USER_ID)
        await orchestrator.calculate_and_store(USER_ID)  # cache hit

        assert len(received) == 1
        assert received[0].user_id == USER_ID
        assert received[0].steps_goal == 10500
        assert received[0].calculation_source == CalculationSource.WHO_STANDARD

    @pytest.mark.asyncio
    async def test_no_event_on_failure(
        self,
        orchestrator: GoalCalculationOrchestrator,
        profile_source: InMemoryProfileSource,
        event_bus: InMemoryEventBus,
    ) -> None:
        handler = AsyncMock()
        event_bus.subscribe(GoalsCalculated, handler)
        await profile_source.save_profile(_profile(height_cm=-1.0))

        await orchestrator.calculate_and_store(USER_ID)

        handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_bus_failure_does_not_change_outcome(
        self,
        profile_source: InMemoryProfileSource,
        repository: InMemoryGoalRepository,
        cache: InMemoryFreshnessCache,
    ) -> None:
        event_bus = Mock()
        event_bus.publish = AsyncMock(side_effect=RuntimeError("bus down"))
        orchestrator = GoalCalculationOrchestrator(
            profile_source=profile_source,
            repository=repository,
            cache=cache,
            steps_calculator=StepsGoalService(),
            calories_calculator=CaloriesGoalService(),
            heart_points_calculator=HeartPointsGoalService(),
            event_bus=event_bus,
            settings=FAST_RETRY,
            clock=lambda: TODAY,
        )
        await profile_source.save_profile(_profile())

        result = await orchestrator.calculate_and_store(USER_ID)

        assert result.is_success
        event_bus.publish.assert_awaited_once()
