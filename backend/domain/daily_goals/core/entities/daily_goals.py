"""DailyGoals entity - the computed daily wellness targets."""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional

from ..value_objects.calculation_source import CalculationSource
from ..value_objects.goal_bounds import (
    CALORIES_BOUNDS,
    HEART_POINTS_BOUNDS,
    STEPS_BOUNDS,
)

DEFAULT_STEPS_GOAL = 10000
DEFAULT_CALORIES_GOAL = 2000
DEFAULT_HEART_POINTS_GOAL = 30


@dataclass(frozen=True)
class DailyGoals:
    """Daily steps, calories and heart points targets for one user.

    Immutable: a recalculation produces a new instance and the old one is
    superseded, never mutated. Build instances with ``create`` so that
    ``is_valid`` reflects the safety bounds.

    Attributes:
        user_id: User the goals belong to
        steps_goal: Daily steps target
        calories_goal: Daily calorie expenditure target (kcal)
        heart_points_goal: Daily heart points target
        calculated_at: When the goals were produced (UTC)
        calculation_source: Provenance of the numbers
        is_valid: All three goals lie within their safety bounds
        is_fresh: Profile unchanged since calculation
        profile_fingerprint: Fingerprint of the profile used, if any
    """

    user_id: str
    steps_goal: int
    calories_goal: int
    heart_points_goal: int
    calculated_at: datetime
    calculation_source: CalculationSource
    is_valid: bool = True
    is_fresh: bool = True
    profile_fingerprint: Optional[str] = None

    @staticmethod
    def create(
        user_id: str,
        steps_goal: int,
        calories_goal: int,
        heart_points_goal: int,
        calculation_source: CalculationSource,
        calculated_at: Optional[datetime] = None,
        profile_fingerprint: Optional[str] = None,
    ) -> "DailyGoals":
        """Factory computing ``is_valid`` from the safety bounds.

        Returns:
            DailyGoals: New fresh goals
        """
        is_valid = (
            STEPS_BOUNDS.contains(steps_goal)
            and CALORIES_BOUNDS.contains(calories_goal)
            and HEART_POINTS_BOUNDS.contains(heart_points_goal)
        )
        return DailyGoals(
            user_id=user_id,
            steps_goal=steps_goal,
            calories_goal=calories_goal,
            heart_points_goal=heart_points_goal,
            calculated_at=calculated_at or datetime.now(timezone.utc),
            calculation_source=calculation_source,
            is_valid=is_valid,
            is_fresh=True,
            profile_fingerprint=profile_fingerprint,
        )

    @staticmethod
    def create_default(user_id: str) -> "DailyGoals":
        """Generic goals used before any profile data is known."""
        return DailyGoals.create(
            user_id=user_id,
            steps_goal=DEFAULT_STEPS_GOAL,
            calories_goal=DEFAULT_CALORIES_GOAL,
            heart_points_goal=DEFAULT_HEART_POINTS_GOAL,
            calculation_source=CalculationSource.DEFAULT,
        )

    def mark_stale(self) -> "DailyGoals":
        """Copy flagged as no longer matching the profile."""
        return replace(self, is_fresh=False)

    def is_fallback(self) -> bool:
        return self.calculation_source == CalculationSource.FALLBACK_DEFAULT

    def summary(self) -> str:
        return (
            f"Steps: {self.steps_goal}, Calories: {self.calories_goal}, "
            f"Heart Points: {self.heart_points_goal}"
        )

    def sanitize_for_logging(self) -> str:
        return (
            f"Goals(steps={self.steps_goal}, calories={self.calories_goal}, "
            f"heartPoints={self.heart_points_goal}, "
            f"source={self.calculation_source.name})"
        )
