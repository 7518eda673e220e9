"""MongoDB implementation of IGoalRepository."""

import logging
from typing import Any, Dict, List, Optional
from uuid import uuid4

from domain.daily_goals.core.entities.daily_goals import DailyGoals
from domain.daily_goals.core.exceptions.domain_errors import GoalStorageError
from domain.daily_goals.core.ports.repository import IGoalRepository
from domain.daily_goals.core.value_objects.calculation_source import (
    CalculationSource,
)

from .base import MongoBaseRepository

logger = logging.getLogger(__name__)

DESCENDING = -1
ASCENDING = 1


class MongoGoalRepository(MongoBaseRepository[DailyGoals], IGoalRepository):
    """MongoDB implementation of daily goals repository.

    Every save inserts a new document, so superseded versions stay
    available through ``history``. The current goals are the most recent
    document for the user.
    """

    @property
    def collection_name(self) -> str:
        """MongoDB collection name."""
        return "daily_goals"

    def to_document(self, entity: DailyGoals) -> Dict[str, Any]:
        """Convert DailyGoals entity to MongoDB document.

        Args:
            entity: Domain entity

        Returns:
            dict: MongoDB document
        """
        goals = entity
        return {
            "_id": str(uuid4()),
            "user_id": goals.user_id,
            "steps_goal": goals.steps_goal,
            "calories_goal": goals.calories_goal,
            "heart_points_goal": goals.heart_points_goal,
            "calculated_at": self.datetime_to_iso(goals.calculated_at),
            "calculation_source": goals.calculation_source.value,
            "is_valid": goals.is_valid,
            "is_fresh": goals.is_fresh,
            "profile_fingerprint": goals.profile_fingerprint,
        }

    def from_document(self, doc: Dict[str, Any]) -> DailyGoals:
        """Convert MongoDB document to DailyGoals entity.

        Args:
            doc: MongoDB document

        Returns:
            DailyGoals: Domain entity
        """
        return DailyGoals(
            user_id=doc["user_id"],
            steps_goal=int(doc["steps_goal"]),
            calories_goal=int(doc["calories_goal"]),
            heart_points_goal=int(doc["heart_points_goal"]),
            calculated_at=self.iso_to_datetime(doc["calculated_at"]),
            calculation_source=CalculationSource(doc["calculation_source"]),
            is_valid=bool(doc.get("is_valid", True)),
            is_fresh=bool(doc.get("is_fresh", True)),
            profile_fingerprint=doc.get("profile_fingerprint"),
        )

    async def save(self, goals: DailyGoals) -> None:
        """Insert goals as the user's newest version.

        Args:
            goals: Goals to save

        Raises:
            GoalStorageError: If the insert fails
        """
        try:
            await self._insert_one(self.to_document(goals))
        except Exception as e:
            raise GoalStorageError(f"Failed to save goals for user {goals.user_id}") from e

        logger.debug(
            "Saved daily goals",
            extra={"user_id": goals.user_id, "source": goals.calculation_source.value},
        )

    async def find_by_user_id(self, user_id: str) -> Optional[DailyGoals]:
        """Find the newest goals for a user.

        Args:
            user_id: User identifier

        Returns:
            DailyGoals if found, None otherwise
        """
        docs = await self._find_many(
            {"user_id": user_id},
            sort=[("calculated_at", DESCENDING)],
            limit=1,
        )
        if not docs:
            return None
        return self.from_document(docs[0])

    async def history(self, user_id: str) -> List[DailyGoals]:
        """All stored versions for a user, oldest first.

        Args:
            user_id: User identifier

        Returns:
            List of DailyGoals (empty if none)
        """
        docs = await self._find_many(
            {"user_id": user_id},
            sort=[("calculated_at", ASCENDING)],
        )
        return [self.from_document(doc) for doc in docs]
