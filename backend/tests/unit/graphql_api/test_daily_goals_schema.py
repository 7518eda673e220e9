"""GraphQL tests for the daily goals schema.

Executes queries and mutations against the real schema with in-memory
adapters wired through GraphQLContext.
"""

from datetime import date
from typing import Any, AsyncIterator

import pytest
import pytest_asyncio

from application.daily_goals.orchestrators.goal_calculation_orchestrator import (
    GoalCalculationOrchestrator,
)
from application.daily_goals.services.recalculation_trigger import (
    RecalculationTriggerService,
)
from domain.daily_goals.calculation import (
    CaloriesGoalService,
    HeartPointsGoalService,
    StepsGoalService,
)
from domain.daily_goals.core.value_objects import ActivityLevel, Gender, GoalProfile
from graphql_api.context import GraphQLContext, create_context
from graphql_api.schema import create_schema
from infrastructure.cache.in_memory_freshness_cache import InMemoryFreshnessCache
from infrastructure.config import GoalEngineSettings
from infrastructure.events.in_memory_bus import InMemoryEventBus
from infrastructure.persistence.in_memory.goal_repository import InMemoryGoalRepository
from infrastructure.persistence.in_memory.profile_source import InMemoryProfileSource

TODAY = date(2025, 6, 1)
SETTINGS = GoalEngineSettings(
    storage_retry_min_wait_s=0,
    storage_retry_max_wait_s=0,
    recalc_debounce_s=10.0,
)

CALCULATE = """
mutation Calculate($userId: String!, $force: Boolean!) {
  dailyGoals {
    calculate(userId: $userId, forceRecalculation: $force) {
      success
      wasRecalculated
      isDurable
      goals { userId stepsGoal caloriesGoal heartPointsGoal calculationSource isFresh }
      fallbackGoals { stepsGoal calculationSource }
      fallbackExplanation
      error { kind message retryable issues }
    }
  }
}
"""

CURRENT = """
query Current($userId: String!) {
  dailyGoals {
    current(userId: $userId) { stepsGoal isFresh }
    hasValidGoals(userId: $userId)
  }
}
"""


@pytest.fixture
def schema() -> Any:
    return create_schema()


@pytest.fixture
def profile_source() -> InMemoryProfileSource:
    return InMemoryProfileSource()


@pytest_asyncio.fixture
async def context(profile_source: InMemoryProfileSource) -> AsyncIterator[GraphQLContext]:
    orchestrator = GoalCalculationOrchestrator(
        profile_source=profile_source,
        repository=InMemoryGoalRepository(),
        cache=InMemoryFreshnessCache(),
        steps_calculator=StepsGoalService(),
        calories_calculator=CaloriesGoalService(),
        heart_points_calculator=HeartPointsGoalService(),
        settings=SETTINGS,
        clock=lambda: TODAY,
    )
    trigger_service = RecalculationTriggerService(orchestrator, settings=SETTINGS, clock=lambda: TODAY)
    yield create_context(
        profile_source=profile_source,
        goal_orchestrator=orchestrator,
        trigger_service=trigger_service,
        event_bus=InMemoryEventBus(),
    )
    trigger_service.cancel_all()


async def _save_profile(profile_source: InMemoryProfileSource, **overrides: Any) -> None:
    data = dict(
        user_id="user123",
        birthdate=date(2000, 1, 1),
        gender=Gender.MALE,
        height_cm=175.0,
        weight_kg=70.0,
        activity_level=ActivityLevel.LIGHT,
    )
    data.update(overrides)
    await profile_source.save_profile(GoalProfile(**data))


class TestCalculateMutation:
    """Test dailyGoals.calculate."""

    @pytest.mark.asyncio
    async def test_calculate_success(
        self, schema: Any, context: GraphQLContext, profile_source: InMemoryProfileSource
    ) -> None:
        await _save_profile(profile_source)

        result = await schema.execute(
            CALCULATE,
            variable_values={"userId": "user123", "force": False},
            context_value=context,
        )

        assert result.errors is None
        payload = result.data["dailyGoals"]["calculate"]
        assert payload["success"] is True
        assert payload["wasRecalculated"] is True
        assert payload["isDurable"] is True
        assert payload["error"] is None
        assert payload["goals"] == {
            "userId": "user123",
            "stepsGoal": 10500,
            "caloriesGoal": 2371,
            "heartPointsGoal": 20,
            "calculationSource": "WHO_STANDARD",
            "isFresh": True,
        }

    @pytest.mark.asyncio
    async def test_calculate_missing_profile(self, schema: Any, context: GraphQLContext) -> None:
        result = await schema.execute(
            CALCULATE,
            variable_values={"userId": "ghost", "force": False},
            context_value=context,
        )

        assert result.errors is None
        payload = result.data["dailyGoals"]["calculate"]
        assert payload["success"] is False
        assert payload["goals"] is None
        assert payload["error"]["kind"] == "PROFILE_NOT_FOUND"
        assert payload["error"]["retryable"] is False

    @pytest.mark.asyncio
    async def test_calculate_validation_issues(
        self, schema: Any, context: GraphQLContext, profile_source: InMemoryProfileSource
    ) -> None:
        await _save_profile(profile_source, height_cm=-1.0)

        result = await schema.execute(
            CALCULATE,
            variable_values={"userId": "user123", "force": True},
            context_value=context,
        )

        error = result.data["dailyGoals"]["calculate"]["error"]
        assert error["kind"] == "VALIDATION_FAILED"
        assert any("Height" in issue for issue in error["issues"])


class TestDailyGoalsQueries:
    """Test dailyGoals queries."""

    @pytest.mark.asyncio
    async def test_current_before_and_after_calculation(
        self, schema: Any, context: GraphQLContext, profile_source: InMemoryProfileSource
    ) -> None:
        await _save_profile(profile_source)

        before = await schema.execute(
            CURRENT, variable_values={"userId": "user123"}, context_value=context
        )
        assert before.data["dailyGoals"] == {"current": None, "hasValidGoals": False}

        await schema.execute(
            CALCULATE,
            variable_values={"userId": "user123", "force": False},
            context_value=context,
        )
        after = await schema.execute(
            CURRENT, variable_values={"userId": "user123"}, context_value=context
        )

        assert after.data["dailyGoals"] == {
            "current": {"stepsGoal": 10500, "isFresh": True},
            "hasValidGoals": True,
        }

    @pytest.mark.asyncio
    async def test_breakdown(
        self, schema: Any, context: GraphQLContext, profile_source: InMemoryProfileSource
    ) -> None:
        await _save_profile(profile_source)
        query = """
        query {
          dailyGoals {
            breakdown(userId: "user123") {
              age
              gender
              activityLevel
              steps { baseGoal finalGoal boundsApplied }
              calories { equation finalGoal }
              heartPoints { finalGoal weeklyMinutesEquivalent }
              explanation
            }
          }
        }
        """

        result = await schema.execute(query, context_value=context)

        assert result.errors is None
        breakdown = result.data["dailyGoals"]["breakdown"]
        assert breakdown["age"] == 25
        assert breakdown["gender"] == "MALE"
        assert breakdown["activityLevel"] == "LIGHT"
        assert breakdown["steps"] == {"baseGoal": 10000, "finalGoal": 10500, "boundsApplied": False}
        assert breakdown["calories"]["finalGoal"] == 2371
        assert breakdown["heartPoints"] == {"finalGoal": 20, "weeklyMinutesEquivalent": 140}
        assert "Daily Goals Calculation Summary" in breakdown["explanation"]

    @pytest.mark.asyncio
    async def test_breakdown_overridden_goal_is_null(
        self, schema: Any, context: GraphQLContext, profile_source: InMemoryProfileSource
    ) -> None:
        await _save_profile(profile_source, steps_goal_override=12000)
        query = """
        query {
          dailyGoals {
            breakdown(userId: "user123") {
              steps { finalGoal }
              calories { finalGoal }
            }
          }
        }
        """

        result = await schema.execute(query, context_value=context)

        assert result.errors is None
        breakdown = result.data["dailyGoals"]["breakdown"]
        assert breakdown["steps"] is None
        assert breakdown["calories"] == {"finalGoal": 2371}

    @pytest.mark.asyncio
    async def test_breakdown_missing_profile(self, schema: Any, context: GraphQLContext) -> None:
        result = await schema.execute(
            'query { dailyGoals { breakdown(userId: "ghost") { age } } }',
            context_value=context,
        )

        assert result.data["dailyGoals"]["breakdown"] is None

    @pytest.mark.asyncio
    async def test_health(self, schema: Any, context: GraphQLContext) -> None:
        result = await schema.execute("query { health }", context_value=context)
        assert result.data == {"health": "ok"}


class TestUpdateProfileMutation:
    """Test dailyGoals.updateProfile."""

    UPDATE = """
    mutation Update($input: GoalProfileInput!) {
      dailyGoals {
        updateProfile(input: $input) {
          userId
          recalculationScheduled
          triggerReason
        }
      }
    }
    """

    @pytest.mark.asyncio
    async def test_new_profile_schedules_recalculation(
        self, schema: Any, context: GraphQLContext, profile_source: InMemoryProfileSource
    ) -> None:
        variables = {
            "input": {
                "userId": "user123",
                "birthdate": "1990-03-10",
                "gender": "FEMALE",
                "heightCm": 168.0,
                "weightKg": 62.0,
                "activityLevel": "MODERATE",
            }
        }

        result = await schema.execute(self.UPDATE, variable_values=variables, context_value=context)

        assert result.errors is None
        payload = result.data["dailyGoals"]["updateProfile"]
        assert payload == {
            "userId": "user123",
            "recalculationScheduled": True,
            "triggerReason": "New profile created",
        }
        stored = await profile_source.get_profile("user123")
        assert stored is not None
        assert stored.gender == Gender.FEMALE
        assert stored.activity_level == ActivityLevel.MODERATE
        assert stored.birthdate == date(1990, 3, 10)
        assert context.trigger_service.pending_count() == 1

    @pytest.mark.asyncio
    async def test_unchanged_profile_not_scheduled(
        self, schema: Any, context: GraphQLContext, profile_source: InMemoryProfileSource
    ) -> None:
        await _save_profile(profile_source)
        variables = {
            "input": {
                "userId": "user123",
                "birthdate": "2000-01-01",
                "gender": "MALE",
                "heightCm": 175.0,
                "weightKg": 70.0,
            }
        }

        result = await schema.execute(self.UPDATE, variable_values=variables, context_value=context)

        payload = result.data["dailyGoals"]["updateProfile"]
        assert payload["recalculationScheduled"] is False
        assert payload["triggerReason"] is None
