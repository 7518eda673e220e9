"""MongoDB repository implementations."""

from .base import MongoBaseRepository
from .goal_repository import MongoGoalRepository

__all__ = [
    "MongoBaseRepository",
    "MongoGoalRepository",
]
