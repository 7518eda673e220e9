"""GraphQL context factory for dependency injection.

Provides the dependencies daily goals resolvers need:
- Profile source (goal profiles)
- Orchestrator (calculation workflow)
- Trigger service (recalculation on profile change)
- Command/query handlers (CQRS entry points)
- Event bus (domain events)
"""

from typing import Any, Optional
from strawberry.fastapi import BaseContext
from fastapi import Request

from application.daily_goals.commands.calculate_goals import CalculateGoalsHandler
from application.daily_goals.orchestrators.goal_calculation_orchestrator import (
    GoalCalculationOrchestrator,
)
from application.daily_goals.queries.get_goals import GoalsQueryHandler
from application.daily_goals.services.recalculation_trigger import (
    RecalculationTriggerService,
)
from domain.daily_goals.calculation.fallback_service import FallbackGoalGenerator
from domain.shared.ports.event_bus import IEventBus
from infrastructure.persistence.in_memory.profile_source import InMemoryProfileSource


class GraphQLContext(BaseContext):
    """GraphQL context with all dependencies.

    This context is injected into all GraphQL resolvers via the
    `info` parameter. Resolvers access dependencies using
    `info.context.get("service_name")`.

    Attributes:
        profile_source: Store of goal profiles
        goal_orchestrator: Goal calculation orchestrator
        trigger_service: Recalculation trigger service
        calculate_handler: Handler for CalculateGoalsCommand
        query_handler: Handler for daily goals queries
        fallback_generator: Source of fallback explanations
        event_bus: Event bus for domain events
        request: FastAPI request object
    """

    def __init__(
        self,
        profile_source: InMemoryProfileSource,
        goal_orchestrator: GoalCalculationOrchestrator,
        trigger_service: RecalculationTriggerService,
        event_bus: IEventBus,
        fallback_generator: Optional[FallbackGoalGenerator] = None,
        request: Optional[Request] = None,
    ) -> None:
        """Initialize GraphQL context with all dependencies."""
        super().__init__()
        self.profile_source = profile_source
        self.goal_orchestrator = goal_orchestrator
        self.trigger_service = trigger_service
        self.event_bus = event_bus
        self.fallback_generator = fallback_generator or FallbackGoalGenerator()
        self.calculate_handler = CalculateGoalsHandler(goal_orchestrator)
        self.query_handler = GoalsQueryHandler(goal_orchestrator)
        self.request = request

    def get(self, key: str) -> Any:
        """Get dependency by name (for resolver compatibility).

        Args:
            key: Dependency name (e.g., "goal_orchestrator")

        Returns:
            Dependency instance or None if not found

        Example:
            >>> context = info.context
            >>> orchestrator = context.get("goal_orchestrator")
        """
        return getattr(self, key, None)


def create_context(
    profile_source: InMemoryProfileSource,
    goal_orchestrator: GoalCalculationOrchestrator,
    trigger_service: RecalculationTriggerService,
    event_bus: IEventBus,
    request: Optional[Request] = None,
) -> GraphQLContext:
    """Create GraphQL context with all dependencies.

    Example:
        >>> from graphql_api.context import create_context
        >>> context = create_context(
        ...     profile_source=InMemoryProfileSource(),
        ...     goal_orchestrator=orchestrator,
        ...     trigger_service=RecalculationTriggerService(orchestrator),
        ...     event_bus=InMemoryEventBus(),
        ... )
    """
    return GraphQLContext(
        profile_source=profile_source,
        goal_orchestrator=goal_orchestrator,
        trigger_service=trigger_service,
        event_bus=event_bus,
        request=request,
    )
