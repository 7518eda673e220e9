"""Calculation breakdown value objects - explain how each goal was reached."""

from dataclasses import dataclass
from typing import Optional

from .activity_level import ActivityLevel
from .gender import Gender


@dataclass(frozen=True)
class StepsBreakdown:
    """Steps goal calculation steps."""

    base_goal: int
    age_adjustment: float
    gender_adjustment: float
    adjusted_goal: int
    final_goal: int

    @property
    def bounds_applied(self) -> bool:
        return self.adjusted_goal != self.final_goal

    def explanation(self) -> str:
        bounds_note = " (adjusted for safety)" if self.bounds_applied else ""
        return "\n".join(
            [
                f"Steps Goal: {self.final_goal} steps/day{bounds_note}",
                f"- WHO Baseline: {self.base_goal} steps",
                f"- Age Adjustment: {self.age_adjustment}x",
                f"- Gender Adjustment: {self.gender_adjustment}x",
                f"- Adjusted Goal: {self.adjusted_goal} steps",
            ]
        )


@dataclass(frozen=True)
class CaloriesBreakdown:
    """Calories goal calculation steps.

    Attributes:
        bmr: Basal metabolic rate in kcal/day
        equation: Name of the BMR equation used
        activity_level: Activity level applied
        activity_factor: Multiplier applied to BMR
        tdee: Total daily energy expenditure before rounding
        rounded_goal: TDEE rounded to the nearest kcal
        final_goal: Rounded and clamped goal
    """

    bmr: float
    equation: str
    activity_level: ActivityLevel
    activity_factor: float
    tdee: float
    rounded_goal: int
    final_goal: int

    @property
    def bounds_applied(self) -> bool:
        return self.rounded_goal != self.final_goal

    def explanation(self) -> str:
        bounds_note = " (adjusted for medical safety)" if self.bounds_applied else ""
        return "\n".join(
            [
                f"Calorie Goal: {self.final_goal} calories/day{bounds_note}",
                f"- BMR using {self.equation}: {self.bmr:.0f} calories/day",
                f"- Activity Level: {self.activity_level.description()}",
                f"- Activity Factor: {self.activity_factor}x",
                f"- TDEE: {self.bmr:.0f} x {self.activity_factor} = {self.tdee:.0f} calories/day",
            ]
        )


@dataclass(frozen=True)
class HeartPointsBreakdown:
    """Heart points goal calculation steps."""

    weekly_moderate_minutes: int
    daily_moderate_minutes: float
    base_heart_points: float
    age_adjustment: float
    activity_adjustment: float
    adjusted_goal: float
    final_goal: int

    @property
    def bounds_applied(self) -> bool:
        return int(self.adjusted_goal) != self.final_goal

    def explanation(self) -> str:
        bounds_note = " (adjusted for safety)" if self.bounds_applied else ""
        return "\n".join(
            [
                f"Heart Points Goal: {self.final_goal} points/day{bounds_note}",
                f"- WHO Baseline: {self.weekly_moderate_minutes} minutes/week moderate activity",
                f"- Daily Equivalent: {self.daily_moderate_minutes:.1f} minutes/day",
                f"- Age Adjustment: {self.age_adjustment}x",
                f"- Activity Adjustment: {self.activity_adjustment}x",
                f"- Weekly Equivalent: {self.final_goal * 7} minutes of moderate activity",
            ]
        )


@dataclass(frozen=True)
class GoalCalculationBreakdown:
    """Per-component breakdown plus the inputs they were computed from.

    A component is None when the user overrode that goal, so no formula
    contributed to it.
    """

    steps: Optional[StepsBreakdown]
    calories: Optional[CaloriesBreakdown]
    heart_points: Optional[HeartPointsBreakdown]
    age: int
    gender: Gender
    activity_level: ActivityLevel

    def explanation(self) -> str:
        header = (
            f"Daily Goals Calculation Summary\n"
            f"Profile: Age {self.age}, Gender {self.gender.display_name()}, "
            f"Activity Level {self.activity_level.description()}"
        )
        return "\n\n".join(
            [
                header,
                _explain(self.steps, "Steps"),
                _explain(self.calories, "Calorie"),
                _explain(self.heart_points, "Heart Points"),
            ]
        )

    def overridden_components(self) -> list[str]:
        """Names of the goals that were set by the user."""
        components = {
            "steps": self.steps,
            "calories": self.calories,
            "heart_points": self.heart_points,
        }
        return [name for name, value in components.items() if value is None]


def _explain(component, label: str) -> str:
    if component is None:
        return f"{label} Goal: set by user"
    return component.explanation()
