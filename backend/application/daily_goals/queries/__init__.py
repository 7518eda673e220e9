"""Daily goals queries."""

from .get_goals import (
    GetCurrentGoalsQuery,
    GetGoalBreakdownQuery,
    GoalsQueryHandler,
    HasValidGoalsQuery,
)

__all__ = [
    "GetCurrentGoalsQuery",
    "HasValidGoalsQuery",
    "GetGoalBreakdownQuery",
    "GoalsQueryHandler",
]
