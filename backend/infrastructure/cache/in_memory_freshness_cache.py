"""
In-memory freshness cache implementation.

Single-process cache of the last computed goals per user. An entry is
fresh while the profile fingerprint it was stored under still matches;
there is no TTL and no eviction.
"""

import asyncio
import logging
from typing import Dict, Optional, Tuple

from domain.daily_goals.core.entities.daily_goals import DailyGoals
from domain.daily_goals.core.value_objects.profile_fingerprint import (
    ProfileFingerprint,
)

logger = logging.getLogger(__name__)


class InMemoryFreshnessCache:
    """In-memory implementation of the goals freshness cache.

    Holds at most one entry per user; the last ``put`` wins. A lookup
    with a different fingerprint is a miss and leaves the entry in place
    until it is overwritten or invalidated.
    NOT shared across processes.
    """

    def __init__(self) -> None:
        """Initialize empty cache."""
        # Storage: user_id -> (fingerprint, goals)
        self._cache: Dict[str, Tuple[ProfileFingerprint, DailyGoals]] = {}
        self._lock = asyncio.Lock()
        logger.debug("InMemoryFreshnessCache initialized")

    async def get(
        self, user_id: str, fingerprint: ProfileFingerprint
    ) -> Optional[DailyGoals]:
        """Get cached goals for a user and fingerprint.

        Args:
            user_id: User identifier
            fingerprint: Fingerprint of the current profile

        Returns:
            The cached goals if both user and fingerprint match, None otherwise
        """
        async with self._lock:
            entry = self._cache.get(user_id)

        if entry is None:
            logger.debug(f"Cache miss for user: {user_id}")
            return None

        cached_fingerprint, goals = entry
        if cached_fingerprint != fingerprint:
            logger.debug(f"Cache stale for user: {user_id} (fingerprint changed)")
            return None

        logger.debug(f"Cache hit for user: {user_id}")
        return goals

    async def put(
        self, user_id: str, fingerprint: ProfileFingerprint, goals: DailyGoals
    ) -> None:
        """Store goals for a user, replacing any previous entry.

        Args:
            user_id: User identifier
            fingerprint: Fingerprint the goals were computed from
            goals: Goals to cache
        """
        async with self._lock:
            self._cache[user_id] = (fingerprint, goals)
        logger.debug(f"Cached goals for user {user_id}")

    async def invalidate(self, user_id: str) -> None:
        """Drop the entry for a user.

        Args:
            user_id: User identifier
        """
        async with self._lock:
            removed = self._cache.pop(user_id, None)
        if removed is not None:
            logger.debug(f"Invalidated cache entry for user: {user_id}")

    def clear(self) -> None:
        """Clear all cache entries (for testing)."""
        self._cache.clear()
        logger.debug("Cache cleared")

    def size(self) -> int:
        """Number of users with a cached entry."""
        return len(self._cache)
