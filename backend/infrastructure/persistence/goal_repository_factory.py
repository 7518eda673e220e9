"""Factory for creating goal repository instances."""

import logging
from typing import Optional

from domain.daily_goals.core.ports.repository import IGoalRepository
from infrastructure.config import get_mongodb_uri, get_repository_backend
from infrastructure.persistence.in_memory.goal_repository import (
    InMemoryGoalRepository,
)

logger = logging.getLogger(__name__)

# Singleton instance
_goal_repository: Optional[IGoalRepository] = None


def create_goal_repository() -> IGoalRepository:
    """
    Create goal repository based on global REPOSITORY_BACKEND configuration.

    Environment Variables:
        REPOSITORY_BACKEND: Global repository type ('inmemory' or 'mongodb')
        MONGODB_URI: MongoDB connection URI (required if type='mongodb')

    Returns:
        IGoalRepository implementation

    Raises:
        ValueError: If REPOSITORY_BACKEND='mongodb' but MONGODB_URI not set

    Default:
        Returns InMemoryGoalRepository if REPOSITORY_BACKEND not set
    """
    repo_type = get_repository_backend()

    if repo_type == "inmemory":
        return InMemoryGoalRepository()

    elif repo_type == "mongodb":
        if not get_mongodb_uri():
            raise ValueError("REPOSITORY_BACKEND='mongodb' requires MONGODB_URI env var")

        # Lazy import: motor is only needed for the mongodb backend
        from infrastructure.persistence.mongodb.goal_repository import (
            MongoGoalRepository,
        )

        return MongoGoalRepository()

    else:
        logger.warning(f"Unknown REPOSITORY_BACKEND '{repo_type}', using inmemory")
        return InMemoryGoalRepository()


def get_goal_repository() -> IGoalRepository:
    """
    Get singleton goal repository instance.

    Lazy initialization on first call.

    Returns:
        IGoalRepository singleton
    """
    global _goal_repository
    if _goal_repository is None:
        _goal_repository = create_goal_repository()
    return _goal_repository


def reset_goal_repository() -> None:
    """
    Reset singleton instance.

    Useful for testing to ensure clean state.
    """
    global _goal_repository
    _goal_repository = None
