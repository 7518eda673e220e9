"""In-memory persistence implementations."""

from infrastructure.persistence.in_memory.goal_repository import (
    InMemoryGoalRepository,
)
from infrastructure.persistence.in_memory.profile_source import (
    InMemoryProfileSource,
)

__all__ = [
    "InMemoryGoalRepository",
    "InMemoryProfileSource",
]
