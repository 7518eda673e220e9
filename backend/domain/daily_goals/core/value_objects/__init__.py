"""Value objects for daily goals domain."""

from .activity_level import ActivityLevel
from .age_band import AgeBand
from .breakdown import (
    CaloriesBreakdown,
    GoalCalculationBreakdown,
    HeartPointsBreakdown,
    StepsBreakdown,
)
from .calculation_input import CalculationInput
from .calculation_source import CalculationSource
from .gender import Gender
from .goal_bounds import CALORIES_BOUNDS, HEART_POINTS_BOUNDS, STEPS_BOUNDS, GoalBounds
from .goal_profile import GoalProfile
from .profile_fingerprint import ProfileFingerprint

__all__ = [
    "ActivityLevel",
    "AgeBand",
    "CalculationInput",
    "CalculationSource",
    "CaloriesBreakdown",
    "Gender",
    "GoalBounds",
    "GoalCalculationBreakdown",
    "GoalProfile",
    "HeartPointsBreakdown",
    "ProfileFingerprint",
    "StepsBreakdown",
    "STEPS_BOUNDS",
    "CALORIES_BOUNDS",
    "HEART_POINTS_BOUNDS",
]
