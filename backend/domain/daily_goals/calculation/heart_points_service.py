"""HeartPointsGoalService - daily heart points goal calculation."""

from ..core.ports.calculators import IHeartPointsGoalCalculator
from ..core.value_objects.activity_level import ActivityLevel
from ..core.value_objects.breakdown import HeartPointsBreakdown
from ..core.value_objects.calculation_input import CalculationInput
from ..core.value_objects.goal_bounds import HEART_POINTS_BOUNDS

# WHO: 150 minutes of moderate activity per week
WEEKLY_MODERATE_MINUTES = 150
DAILY_BASE_POINTS = WEEKLY_MODERATE_MINUTES / 7

ACTIVITY_ADJUSTMENTS = {
    ActivityLevel.SEDENTARY: 0.9,
    ActivityLevel.LIGHT: 0.95,
    ActivityLevel.MODERATE: 1.0,
    ActivityLevel.ACTIVE: 1.1,
    ActivityLevel.VERY_ACTIVE: 1.15,
}


class HeartPointsGoalService(IHeartPointsGoalCalculator):
    """Calculate daily heart points goal.

    One heart point is one minute of moderate activity, so the WHO weekly
    target of 150 minutes gives a daily base of about 21.4 points.

    Formula:
        points = 150 / 7 × age factor × activity adjustment, truncated

    The result is clamped to 15-50 points.
    """

    def calculate(self, calculation_input: CalculationInput) -> int:
        """Calculate heart points goal.

        Args:
            calculation_input: Validated calculation input

        Returns:
            int: Daily heart points goal
        """
        return self.breakdown(calculation_input).final_goal

    def breakdown(self, calculation_input: CalculationInput) -> HeartPointsBreakdown:
        adjusted = self._adjusted_goal(calculation_input)
        return HeartPointsBreakdown(
            weekly_moderate_minutes=WEEKLY_MODERATE_MINUTES,
            daily_moderate_minutes=DAILY_BASE_POINTS,
            base_heart_points=DAILY_BASE_POINTS,
            age_adjustment=calculation_input.age_band.activity_factor(),
            activity_adjustment=ACTIVITY_ADJUSTMENTS[calculation_input.activity_level],
            adjusted_goal=adjusted,
            final_goal=HEART_POINTS_BOUNDS.clamp(int(adjusted)),
        )

    def minutes_for(self, points: int) -> int:
        """Minutes of moderate activity that earn the given points."""
        return points

    def weekly_equivalent(self, points: int) -> int:
        """Weekly moderate minutes matching a daily points goal."""
        return points * 7

    def _adjusted_goal(self, calculation_input: CalculationInput) -> float:
        return (
            DAILY_BASE_POINTS
            * calculation_input.age_band.activity_factor()
            * ACTIVITY_ADJUSTMENTS[calculation_input.activity_level]
        )
