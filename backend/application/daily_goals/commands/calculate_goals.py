"""CalculateGoalsCommand - compute and store a user's daily goals."""

import logging
from dataclasses import dataclass

from ..orchestrators.goal_calculation_orchestrator import (
    GoalCalculationOrchestrator,
    GoalCalculationResult,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CalculateGoalsCommand:
    """Command to calculate daily goals.

    Attributes:
        user_id: User identifier (from authentication)
        force_recalculation: Recalculate even if cached goals are fresh
    """

    user_id: str
    force_recalculation: bool = False


class CalculateGoalsHandler:
    """Handler for CalculateGoalsCommand.

    Thin entry point over the orchestrator; the result carries any error
    instead of raising.
    """

    def __init__(self, orchestrator: GoalCalculationOrchestrator):
        self._orchestrator = orchestrator

    async def handle(self, command: CalculateGoalsCommand) -> GoalCalculationResult:
        """
        Handle calculate goals command.

        Args:
            command: CalculateGoalsCommand with user ID

        Returns:
            GoalCalculationResult with goals and/or error
        """
        logger.debug(
            "Handling CalculateGoalsCommand",
            extra={"user_id": command.user_id, "forced": command.force_recalculation},
        )
        return await self._orchestrator.calculate_and_store(
            user_id=command.user_id,
            force_recalculation=command.force_recalculation,
        )
