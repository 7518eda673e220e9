"""IGoalRepository port - storage sink for computed goals."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.daily_goals import DailyGoals


class IGoalRepository(ABC):
    """Port for daily goals persistence.

    Adapters signal a failed write by raising (``GoalStorageError`` or the
    driver's own exception); the orchestrator turns it into
    ``StorageFailedError``. Timeouts are the adapter's concern.
    """

    @abstractmethod
    async def save(self, goals: DailyGoals) -> None:
        """Persist goals, superseding the user's previous goals.

        Args:
            goals: Goals to save

        Raises:
            GoalStorageError: If the goals could not be persisted
        """
        pass

    @abstractmethod
    async def find_by_user_id(self, user_id: str) -> Optional[DailyGoals]:
        """Find the current goals of a user.

        Args:
            user_id: User identifier

        Returns:
            Optional[DailyGoals]: Latest goals if any, None otherwise
        """
        pass

    @abstractmethod
    async def history(self, user_id: str) -> List[DailyGoals]:
        """All stored versions for a user, oldest first.

        Args:
            user_id: User identifier

        Returns:
            List[DailyGoals]: Superseded and current goals
        """
        pass
