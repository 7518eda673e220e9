"""Main GraphQL schema factory for the daily goals service.

Usage:
    from graphql_api.schema import create_schema
    schema = create_schema()
"""

import datetime

import strawberry

from graphql_api.resolvers.daily_goals import DailyGoalsMutations, DailyGoalsQueries


@strawberry.type
class Query:
    @strawberry.field
    def server_time(self) -> str:
        return datetime.datetime.now(datetime.timezone.utc).isoformat()

    @strawberry.field
    def health(self) -> str:
        return "ok"

    @strawberry.field(description="Daily goals queries")  # type: ignore[misc]
    def daily_goals(self) -> DailyGoalsQueries:
        """Daily goals queries (CQRS).

        Example:
            query {
              dailyGoals {
                current(userId: "user123") { stepsGoal }
                hasValidGoals(userId: "user123")
              }
            }
        """
        return DailyGoalsQueries()


@strawberry.type
class Mutation:
    @strawberry.field(description="Daily goals mutations")  # type: ignore[misc]
    def daily_goals(self) -> DailyGoalsMutations:
        """Daily goals mutations (CQRS commands).

        Example:
            mutation {
              dailyGoals {
                calculate(userId: "user123") { success }
              }
            }
        """
        return DailyGoalsMutations()


def create_schema() -> strawberry.Schema:
    """Create Strawberry schema with all resolvers.

    Returns:
        Configured Strawberry Schema instance
    """
    return strawberry.Schema(
        query=Query,
        mutation=Mutation,
    )
