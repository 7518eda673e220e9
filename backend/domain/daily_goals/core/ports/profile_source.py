"""IGoalProfileSource port - where the engine reads user profiles from."""

from abc import ABC, abstractmethod
from typing import Optional

from ..value_objects.goal_profile import GoalProfile


class IGoalProfileSource(ABC):
    """Port for reading the goal-relevant part of a user profile."""

    @abstractmethod
    async def get_profile(self, user_id: str) -> Optional[GoalProfile]:
        """Load a user's current profile.

        Args:
            user_id: User identifier

        Returns:
            Optional[GoalProfile]: Profile if found, None otherwise
        """
        pass
