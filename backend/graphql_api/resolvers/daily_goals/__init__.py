"""Daily goals GraphQL resolvers.

This module exports mutations and queries for the daily goals domain.
"""

from graphql_api.resolvers.daily_goals.mutations import DailyGoalsMutations
from graphql_api.resolvers.daily_goals.queries import DailyGoalsQueries

__all__ = [
    "DailyGoalsMutations",
    "DailyGoalsQueries",
]
