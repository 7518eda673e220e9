"""GraphQL types for daily goals domain.

These types expose personalized daily steps, calories and heart points
goals, their calculation breakdown and the calculation outcome.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional
from datetime import date, datetime
import strawberry


__all__ = [
    # Enums
    "GenderEnum",
    "ActivityLevelEnum",
    "CalculationSourceEnum",
    "GoalErrorKindEnum",
    # Output types
    "DailyGoalsType",
    "GoalErrorType",
    "CalculateGoalsPayload",
    "StepsBreakdownType",
    "CaloriesBreakdownType",
    "HeartPointsBreakdownType",
    "GoalBreakdownType",
    "UpdateGoalProfilePayload",
    # Input types
    "GoalProfileInput",
]


# ============================================
# ENUMS
# ============================================


@strawberry.enum
class GenderEnum(str, Enum):
    """Gender selection used by goal formulas."""

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"


@strawberry.enum
class ActivityLevelEnum(str, Enum):
    """Habitual activity level for TDEE calculation."""

    SEDENTARY = "sedentary"  # Little or no exercise
    LIGHT = "light"  # Light exercise 1-3 days/week
    MODERATE = "moderate"  # Moderate exercise 3-5 days/week
    ACTIVE = "active"  # Hard exercise 6-7 days/week
    VERY_ACTIVE = "very_active"  # Very hard exercise + physical job


@strawberry.enum
class CalculationSourceEnum(str, Enum):
    """Provenance of the goal numbers."""

    WHO_STANDARD = "who_standard"
    PERSONALIZED = "personalized"
    USER_ADJUSTED = "user_adjusted"
    MANUAL = "manual"
    DEFAULT = "default"
    FALLBACK_DEFAULT = "fallback_default"


@strawberry.enum
class GoalErrorKindEnum(str, Enum):
    """Kinds of goal calculation failures."""

    PROFILE_NOT_FOUND = "profile_not_found"
    VALIDATION_FAILED = "validation_failed"
    CALCULATION_FAILED = "calculation_failed"
    STORAGE_FAILED = "storage_failed"
    UNEXPECTED_ERROR = "unexpected_error"


# ============================================
# OUTPUT TYPES
# ============================================


@strawberry.type
class DailyGoalsType:
    """Daily wellness targets for a user."""

    user_id: str
    steps_goal: int
    calories_goal: int  # kcal/day
    heart_points_goal: int
    calculated_at: datetime
    calculation_source: CalculationSourceEnum
    is_valid: bool
    is_fresh: bool


@strawberry.type
class GoalErrorType:
    """Why a goal calculation did not fully succeed."""

    kind: GoalErrorKindEnum
    message: str
    retryable: bool
    issues: List[str]


@strawberry.type
class CalculateGoalsPayload:
    """Outcome of a goal calculation request.

    On a storage failure ``goals`` is set but ``is_durable`` is false.
    On a calculation failure ``fallback_goals`` carries safe defaults.
    """

    success: bool
    was_recalculated: bool
    is_durable: bool
    goals: Optional[DailyGoalsType] = None
    fallback_goals: Optional[DailyGoalsType] = None
    fallback_explanation: Optional[str] = None
    error: Optional[GoalErrorType] = None


@strawberry.type
class StepsBreakdownType:
    base_goal: int
    age_adjustment: float
    gender_adjustment: float
    final_goal: int
    bounds_applied: bool


@strawberry.type
class CaloriesBreakdownType:
    bmr: float  # kcal/day
    equation: str
    activity_factor: float
    tdee: float  # kcal/day
    final_goal: int
    bounds_applied: bool


@strawberry.type
class HeartPointsBreakdownType:
    base_heart_points: float
    age_adjustment: float
    activity_adjustment: float
    final_goal: int
    weekly_minutes_equivalent: int
    bounds_applied: bool


@strawberry.type
class GoalBreakdownType:
    """How each goal was derived from the profile.

    Components are null for goals the user set themselves.
    """

    age: int
    gender: GenderEnum
    activity_level: ActivityLevelEnum
    steps: Optional[StepsBreakdownType]
    calories: Optional[CaloriesBreakdownType]
    heart_points: Optional[HeartPointsBreakdownType]
    explanation: str


@strawberry.type
class UpdateGoalProfilePayload:
    """Result of a profile update.

    ``trigger_reason`` is set when the update scheduled a recalculation.
    """

    user_id: str
    recalculation_scheduled: bool
    trigger_reason: Optional[str] = None


# ============================================
# INPUT TYPES
# ============================================


@strawberry.input
class GoalProfileInput:
    """Goal-relevant profile fields."""

    user_id: str
    birthdate: date
    gender: GenderEnum
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevelEnum = ActivityLevelEnum.LIGHT
    steps_goal_override: Optional[int] = None
    calories_goal_override: Optional[int] = None
    heart_points_goal_override: Optional[int] = None
