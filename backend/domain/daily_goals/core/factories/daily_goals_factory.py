"""DailyGoalsFactory - assembles DailyGoals from formulas and overrides."""

from typing import Optional

from ..entities.daily_goals import DailyGoals
from ..value_objects.calculation_source import CalculationSource
from ..value_objects.goal_bounds import (
    CALORIES_BOUNDS,
    HEART_POINTS_BOUNDS,
    STEPS_BOUNDS,
)
from ..value_objects.goal_profile import GoalProfile
from ..value_objects.profile_fingerprint import ProfileFingerprint


class DailyGoalsFactory:
    """Factory for creating DailyGoals entities.

    Encapsulates the source selection and override rules:

    - no overrides: formula values, ``WHO_STANDARD``
    - some overrides: overrides win, formula values fill the rest,
      ``USER_ADJUSTED``
    - all three overrides: ``MANUAL``

    Override values go through the same safety clamps as formula values.
    """

    @staticmethod
    def create(
        profile: GoalProfile,
        fingerprint: ProfileFingerprint,
        steps_goal: Optional[int] = None,
        calories_goal: Optional[int] = None,
        heart_points_goal: Optional[int] = None,
    ) -> DailyGoals:
        """Create goals for a profile.

        Args:
            profile: Profile the goals are for
            fingerprint: Fingerprint of that profile
            steps_goal: Formula steps goal (unused when overridden)
            calories_goal: Formula calories goal (unused when overridden)
            heart_points_goal: Formula heart points goal (unused when overridden)

        Returns:
            DailyGoals: New fresh goals

        Raises:
            ValueError: If a goal has neither an override nor a formula value
        """
        steps = _pick(profile.steps_goal_override, steps_goal, "steps")
        calories = _pick(profile.calories_goal_override, calories_goal, "calories")
        heart_points = _pick(
            profile.heart_points_goal_override, heart_points_goal, "heart_points"
        )

        return DailyGoals.create(
            user_id=profile.user_id,
            steps_goal=STEPS_BOUNDS.clamp(steps),
            calories_goal=CALORIES_BOUNDS.clamp(calories),
            heart_points_goal=HEART_POINTS_BOUNDS.clamp(heart_points),
            calculation_source=profile.override_source() or CalculationSource.WHO_STANDARD,
            profile_fingerprint=fingerprint.value,
        )


def _pick(override: Optional[int], computed: Optional[int], name: str) -> int:
    if override is not None:
        return override
    if computed is None:
        raise ValueError(f"No {name} goal available")
    return computed
