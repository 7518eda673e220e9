"""Daily goals queries - read access to stored goals and breakdowns."""

from dataclasses import dataclass
from typing import Optional

from domain.daily_goals.core.entities.daily_goals import DailyGoals
from domain.daily_goals.core.value_objects.breakdown import GoalCalculationBreakdown

from ..orchestrators.goal_calculation_orchestrator import GoalCalculationOrchestrator


@dataclass(frozen=True)
class GetCurrentGoalsQuery:
    """Query to retrieve a user's stored goals.

    Attributes:
        user_id: User identifier
    """

    user_id: str


@dataclass(frozen=True)
class HasValidGoalsQuery:
    """Query whether stored goals are still usable.

    Attributes:
        user_id: User identifier
    """

    user_id: str


@dataclass(frozen=True)
class GetGoalBreakdownQuery:
    """Query for the calculation breakdown of the current profile.

    Attributes:
        user_id: User identifier
    """

    user_id: str


class GoalsQueryHandler:
    """Handler for daily goals queries.

    Provides read-only access via the orchestrator.
    """

    def __init__(self, orchestrator: GoalCalculationOrchestrator):
        self._orchestrator = orchestrator

    async def handle_current(self, query: GetCurrentGoalsQuery) -> Optional[DailyGoals]:
        """
        Handle get current goals query.

        Args:
            query: GetCurrentGoalsQuery with user ID

        Returns:
            Optional[DailyGoals]: Stored goals (stale-flagged if outdated)
        """
        return await self._orchestrator.get_current_goals(query.user_id)

    async def handle_has_valid(self, query: HasValidGoalsQuery) -> bool:
        return await self._orchestrator.has_valid_goals(query.user_id)

    async def handle_breakdown(
        self, query: GetGoalBreakdownQuery
    ) -> Optional[GoalCalculationBreakdown]:
        return await self._orchestrator.get_calculation_breakdown(query.user_id)
