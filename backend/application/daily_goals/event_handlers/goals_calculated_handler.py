"""Handler for GoalsCalculated domain event.

Handles side effects when new goals are stored:
- Structured logging for observability
- Per-source counters
"""

import logging

from domain.daily_goals.core.events.goals_calculated import GoalsCalculated
from metrics import daily_goals as goal_metrics

logger = logging.getLogger(__name__)


class GoalsCalculatedHandler:
    """Handler for GoalsCalculated domain events.

    Side effects only - does NOT modify system state.
    """

    async def handle(self, event: GoalsCalculated) -> None:
        """Handle GoalsCalculated event.

        Args:
            event: GoalsCalculated domain event
        """
        logger.info(
            "goals_calculated",
            extra={
                "event_type": "GoalsCalculated",
                "event_id": str(event.event_id),
                "occurred_at": event.occurred_at.isoformat(),
                "user_id": event.user_id,
                "steps_goal": event.steps_goal,
                "calories_goal": event.calories_goal,
                "heart_points_goal": event.heart_points_goal,
                "calculation_source": event.calculation_source.value,
            },
        )
        goal_metrics.record_stored(event.calculation_source.value)
