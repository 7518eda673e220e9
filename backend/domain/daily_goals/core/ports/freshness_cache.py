"""Freshness cache port.

Holds the last computed goals per user together with the profile
fingerprint they were computed from. Freshness is fingerprint equality,
never elapsed time.
"""

from typing import Optional, Protocol

from ..entities.daily_goals import DailyGoals
from ..value_objects.profile_fingerprint import ProfileFingerprint


class IFreshnessCache(Protocol):
    """Port for the goals freshness cache."""

    async def get(
        self, user_id: str, fingerprint: ProfileFingerprint
    ) -> Optional[DailyGoals]:
        """Get cached goals if both user and fingerprint match.

        Args:
            user_id: User identifier
            fingerprint: Fingerprint of the current profile

        Returns:
            Cached goals on a hit, None on a miss or fingerprint mismatch
        """
        ...

    async def put(
        self, user_id: str, fingerprint: ProfileFingerprint, goals: DailyGoals
    ) -> None:
        """Replace the user's entry (one entry per user, last write wins)."""
        ...

    async def invalidate(self, user_id: str) -> None:
        """Drop the user's entry if present."""
        ...
