"""Query resolvers for daily goals domain.

- current: Stored goals (flagged stale if the profile changed)
- hasValidGoals: Whether stored goals can be used as they are
- breakdown: How each goal derives from the current profile
"""

from typing import Any, Optional
import strawberry

from application.daily_goals.queries.get_goals import (
    GetCurrentGoalsQuery,
    GetGoalBreakdownQuery,
    HasValidGoalsQuery,
)
from graphql_api.resolvers.daily_goals.mappers import map_breakdown, map_goals
from graphql_api.types_daily_goals import DailyGoalsType, GoalBreakdownType


def _query_handler(info: strawberry.types.Info) -> Any:
    handler = info.context.get("query_handler")
    if not handler:
        raise Exception("Missing query_handler in GraphQL context")
    return handler


@strawberry.type
class DailyGoalsQueries:
    """GraphQL queries for daily goals domain."""

    @strawberry.field
    async def current(
        self,
        info: strawberry.types.Info,
        user_id: str,
    ) -> Optional[DailyGoalsType]:
        """Get the user's stored goals.

        Example:
            query {
              dailyGoals {
                current(userId: "user123") {
                  stepsGoal
                  caloriesGoal
                  heartPointsGoal
                  calculationSource
                  isFresh
                }
              }
            }
        """
        goals = await _query_handler(info).handle_current(GetCurrentGoalsQuery(user_id=user_id))
        return map_goals(goals)

    @strawberry.field
    async def has_valid_goals(
        self,
        info: strawberry.types.Info,
        user_id: str,
    ) -> bool:
        """True if stored goals are valid and match the current profile."""
        return bool(
            await _query_handler(info).handle_has_valid(HasValidGoalsQuery(user_id=user_id))
        )

    @strawberry.field
    async def breakdown(
        self,
        info: strawberry.types.Info,
        user_id: str,
    ) -> Optional[GoalBreakdownType]:
        """Calculation breakdown for the current profile (nothing is stored).

        Example:
            query {
              dailyGoals {
                breakdown(userId: "user123") {
                  calories { bmr equation tdee finalGoal }
                  explanation
                }
              }
            }
        """
        breakdown = await _query_handler(info).handle_breakdown(
            GetGoalBreakdownQuery(user_id=user_id)
        )
        if breakdown is None:
            return None
        return map_breakdown(breakdown)
