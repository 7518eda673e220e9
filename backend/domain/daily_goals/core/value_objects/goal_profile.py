"""GoalProfile value object - profile fields consumed by the goals engine."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..exceptions.domain_errors import InvalidCalculationInputError
from .activity_level import ActivityLevel
from .calculation_input import CalculationInput
from .calculation_source import CalculationSource
from .gender import Gender
from .profile_fingerprint import ProfileFingerprint


@dataclass(frozen=True)
class GoalProfile:
    """Read-only view of a user profile as seen by goal calculation.

    Profile storage lives elsewhere; the engine only needs the fields
    below. Override fields hold goals the user typed in themselves.

    Attributes:
        user_id: User identifier
        birthdate: Date of birth
        gender: Gender selection
        height_cm: Height in centimeters
        weight_kg: Weight in kilograms
        activity_level: Habitual activity level (LIGHT when unknown)
        steps_goal_override: User-supplied steps goal
        calories_goal_override: User-supplied calories goal
        heart_points_goal_override: User-supplied heart points goal
    """

    user_id: str
    birthdate: date
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel = ActivityLevel.LIGHT
    steps_goal_override: Optional[int] = None
    calories_goal_override: Optional[int] = None
    heart_points_goal_override: Optional[int] = None

    def age_on(self, day: date) -> int:
        """Completed years on the given day.

        Example:
            >>> GoalProfile(..., birthdate=date(2000, 6, 15), ...).age_on(date(2025, 6, 14))
            24

        Raises:
            InvalidCalculationInputError: If the birthdate is missing
        """
        if not isinstance(self.birthdate, date):
            raise InvalidCalculationInputError(["Birthdate is required to calculate age"])
        had_birthday = (day.month, day.day) >= (self.birthdate.month, self.birthdate.day)
        return day.year - self.birthdate.year - (0 if had_birthday else 1)

    def to_calculation_input(self, today: date) -> CalculationInput:
        """Build a validated calculation input.

        Raises:
            InvalidCalculationInputError: If any field is out of range
        """
        return CalculationInput.create(
            age=self.age_on(today),
            gender=self.gender,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            activity_level=self.activity_level,
        )

    def fingerprint(self, today: date) -> ProfileFingerprint:
        return ProfileFingerprint.compute(
            birthdate=self.birthdate,
            age=self.age_on(today),
            gender=self.gender,
            height_cm=self.height_cm,
            weight_kg=self.weight_kg,
            activity_level=self.activity_level,
            steps_override=self.steps_goal_override,
            calories_override=self.calories_goal_override,
            heart_points_override=self.heart_points_goal_override,
        )

    def has_overrides(self) -> bool:
        return any(
            value is not None
            for value in (
                self.steps_goal_override,
                self.calories_goal_override,
                self.heart_points_goal_override,
            )
        )

    def override_source(self) -> Optional[CalculationSource]:
        """Source implied by the overrides.

        Returns:
            MANUAL when all three goals are overridden, USER_ADJUSTED when
            only some are, None otherwise
        """
        overrides = (
            self.steps_goal_override,
            self.calories_goal_override,
            self.heart_points_goal_override,
        )
        if all(value is not None for value in overrides):
            return CalculationSource.MANUAL
        if any(value is not None for value in overrides):
            return CalculationSource.USER_ADJUSTED
        return None

    def changed_goal_fields(self, other: "GoalProfile") -> list[str]:
        """Names of goal-affecting fields that differ from another profile."""
        fields = [
            "birthdate",
            "gender",
            "height_cm",
            "weight_kg",
            "activity_level",
            "steps_goal_override",
            "calories_goal_override",
            "heart_points_goal_override",
        ]
        return [name for name in fields if getattr(self, name) != getattr(other, name)]
