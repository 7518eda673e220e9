"""Domain → GraphQL mapping helpers for daily goals."""

from typing import Optional

from domain.daily_goals.core.entities.daily_goals import DailyGoals
from domain.daily_goals.core.exceptions.domain_errors import GoalCalculationError
from domain.daily_goals.core.value_objects.breakdown import GoalCalculationBreakdown
from graphql_api.types_daily_goals import (
    ActivityLevelEnum,
    CalculationSourceEnum,
    CaloriesBreakdownType,
    DailyGoalsType,
    GenderEnum,
    GoalBreakdownType,
    GoalErrorKindEnum,
    GoalErrorType,
    HeartPointsBreakdownType,
    StepsBreakdownType,
)


def map_goals(goals: Optional[DailyGoals]) -> Optional[DailyGoalsType]:
    """Map domain DailyGoals to GraphQL DailyGoalsType."""
    if goals is None:
        return None
    return DailyGoalsType(
        user_id=goals.user_id,
        steps_goal=goals.steps_goal,
        calories_goal=goals.calories_goal,
        heart_points_goal=goals.heart_points_goal,
        calculated_at=goals.calculated_at,
        calculation_source=CalculationSourceEnum(goals.calculation_source.value),
        is_valid=goals.is_valid,
        is_fresh=goals.is_fresh,
    )


def map_error(error: Optional[GoalCalculationError]) -> Optional[GoalErrorType]:
    if error is None:
        return None
    return GoalErrorType(
        kind=GoalErrorKindEnum(error.kind.value),
        message=str(error),
        retryable=error.retryable,
        issues=list(getattr(error, "issues", [])),
    )


def map_breakdown(breakdown: GoalCalculationBreakdown) -> GoalBreakdownType:
    """Map domain breakdown to GraphQL GoalBreakdownType.

    Goals the user overrode map to null components.
    """
    steps = breakdown.steps
    calories = breakdown.calories
    heart_points = breakdown.heart_points
    return GoalBreakdownType(
        age=breakdown.age,
        gender=GenderEnum(breakdown.gender.value),
        activity_level=ActivityLevelEnum(breakdown.activity_level.value),
        steps=None
        if steps is None
        else StepsBreakdownType(
            base_goal=steps.base_goal,
            age_adjustment=steps.age_adjustment,
            gender_adjustment=steps.gender_adjustment,
            final_goal=steps.final_goal,
            bounds_applied=steps.bounds_applied,
        ),
        calories=None
        if calories is None
        else CaloriesBreakdownType(
            bmr=calories.bmr,
            equation=calories.equation,
            activity_factor=calories.activity_factor,
            tdee=calories.tdee,
            final_goal=calories.final_goal,
            bounds_applied=calories.bounds_applied,
        ),
        heart_points=None
        if heart_points is None
        else HeartPointsBreakdownType(
            base_heart_points=heart_points.base_heart_points,
            age_adjustment=heart_points.age_adjustment,
            activity_adjustment=heart_points.activity_adjustment,
            final_goal=heart_points.final_goal,
            weekly_minutes_equivalent=heart_points.final_goal * 7,
            bounds_applied=heart_points.bounds_applied,
        ),
        explanation=breakdown.explanation(),
    )
