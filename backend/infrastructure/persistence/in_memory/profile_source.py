"""In-memory implementation of IGoalProfileSource for development and tests."""

from typing import Optional

from domain.daily_goals.core.ports.profile_source import IGoalProfileSource
from domain.daily_goals.core.value_objects.goal_profile import GoalProfile


class InMemoryProfileSource(IGoalProfileSource):
    """
    In-memory store of goal profiles.

    Profile storage and sync are owned by another service; this adapter
    stands in for it locally.
    """

    def __init__(self) -> None:
        """Initialize empty source."""
        self._profiles: dict[str, GoalProfile] = {}

    async def get_profile(self, user_id: str) -> Optional[GoalProfile]:
        """
        Get profile by user ID.

        Args:
            user_id: User ID to search for

        Returns:
            Profile if found, None otherwise
        """
        return self._profiles.get(user_id)

    async def save_profile(self, profile: GoalProfile) -> Optional[GoalProfile]:
        """
        Save or replace a profile.

        Args:
            profile: Profile to store

        Returns:
            The profile it replaced, None if the user had none
        """
        previous = self._profiles.get(profile.user_id)
        self._profiles[profile.user_id] = profile
        return previous

    def clear(self) -> None:
        """Clear all profiles (for testing)."""
        self._profiles.clear()
