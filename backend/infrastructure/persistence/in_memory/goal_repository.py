"""In-memory implementation of IGoalRepository for testing."""

from typing import List, Optional

from domain.daily_goals.core.entities.daily_goals import DailyGoals
from domain.daily_goals.core.ports.repository import IGoalRepository


class InMemoryGoalRepository(IGoalRepository):
    """
    In-memory implementation of goal repository.

    Keeps every saved version per user; the last one is current.
    Superseded versions are never deleted. DailyGoals is immutable, so
    no copies are needed. Data is lost when the application stops.
    """

    def __init__(self) -> None:
        """Initialize empty repository."""
        self._goals: dict[str, List[DailyGoals]] = {}

    async def save(self, goals: DailyGoals) -> None:
        """
        Save goals as the user's current version.

        Args:
            goals: Goals to save
        """
        self._goals.setdefault(goals.user_id, []).append(goals)

    async def find_by_user_id(self, user_id: str) -> Optional[DailyGoals]:
        """
        Find current goals by user ID.

        Args:
            user_id: User ID to search for

        Returns:
            Latest goals if found, None otherwise
        """
        versions = self._goals.get(user_id)
        return versions[-1] if versions else None

    async def history(self, user_id: str) -> List[DailyGoals]:
        """
        All versions for a user, oldest first.

        Args:
            user_id: User identifier

        Returns:
            List of saved goals (empty if none)
        """
        return list(self._goals.get(user_id, []))

    def clear(self) -> None:
        """
        Clear all goals from memory.

        Useful for test cleanup.
        """
        self._goals.clear()

    def count(self) -> int:
        """
        Get number of users with stored goals.

        Returns:
            Number of users
        """
        return len(self._goals)
