"""Daily goals orchestrators."""

from .goal_calculation_orchestrator import (
    GoalCalculationOrchestrator,
    GoalCalculationResult,
    GoalState,
)

__all__ = [
    "GoalCalculationOrchestrator",
    "GoalCalculationResult",
    "GoalState",
]
