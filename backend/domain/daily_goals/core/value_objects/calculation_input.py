"""CalculationInput value object - validated inputs for goal formulas."""

import math
from dataclasses import dataclass
from typing import Dict, List

from .activity_level import ActivityLevel
from .age_band import AgeBand
from .gender import Gender

MIN_AGE = 13
MAX_AGE = 120


@dataclass(frozen=True)
class CalculationInput:
    """Everything the three goal calculators need.

    Immutable value object. Build it with ``create`` so that all fields
    are range-checked before any calculator sees them.

    Attributes:
        age: Age in completed years (13-120), derived from birthdate
        gender: Gender selection
        height_cm: Height in centimeters (positive, finite)
        weight_kg: Weight in kilograms (positive, finite)
        activity_level: Habitual activity level
    """

    age: int
    gender: Gender
    height_cm: float
    weight_kg: float
    activity_level: ActivityLevel = ActivityLevel.LIGHT

    @staticmethod
    def create(
        age: int,
        gender: Gender,
        height_cm: float,
        weight_kg: float,
        activity_level: ActivityLevel = ActivityLevel.LIGHT,
    ) -> "CalculationInput":
        """Create a validated input.

        Raises:
            InvalidCalculationInputError: If any field is missing or out of range
        """
        calculation_input = CalculationInput(
            age=age,
            gender=gender,
            height_cm=height_cm,
            weight_kg=weight_kg,
            activity_level=activity_level,
        )
        calculation_input.validate()
        return calculation_input

    def validation_issues(self) -> List[str]:
        """Collect every violated constraint.

        Returns:
            List[str]: Human-readable issues, empty when the input is valid
        """
        issues: List[str] = []

        if not isinstance(self.age, int) or isinstance(self.age, bool):
            issues.append(f"Age must be an integer, got {self.age!r}")
        elif not (MIN_AGE <= self.age <= MAX_AGE):
            issues.append(f"Age must be {MIN_AGE}-{MAX_AGE} years, got {self.age}")

        if not isinstance(self.gender, Gender):
            issues.append(f"Gender is required, got {self.gender!r}")

        if not _is_positive_number(self.height_cm):
            issues.append(f"Height must be a positive number of cm, got {self.height_cm!r}")

        if not _is_positive_number(self.weight_kg):
            issues.append(f"Weight must be a positive number of kg, got {self.weight_kg!r}")

        if not isinstance(self.activity_level, ActivityLevel):
            issues.append(f"Activity level is required, got {self.activity_level!r}")

        return issues

    def validate(self) -> None:
        """Validate all fields.

        Raises:
            InvalidCalculationInputError: If any constraint is violated
        """
        # Import here to avoid circular dependency
        from ..exceptions.domain_errors import InvalidCalculationInputError

        issues = self.validation_issues()
        if issues:
            raise InvalidCalculationInputError(issues)

    def is_valid(self) -> bool:
        return not self.validation_issues()

    @property
    def age_band(self) -> AgeBand:
        return AgeBand.for_age(self.age)

    def sanitize_for_logging(self) -> Dict[str, str]:
        """Band-level view of the input, safe for log records.

        Returns:
            dict: Age band, height/weight bands, gender and activity level
        """
        if self.height_cm < 160:
            height_band = "below_average"
        elif self.height_cm < 180:
            height_band = "average"
        else:
            height_band = "above_average"

        if self.weight_kg < 60:
            weight_band = "below_average"
        elif self.weight_kg < 80:
            weight_band = "average"
        else:
            weight_band = "above_average"

        return {
            "age_band": self.age_band.value,
            "height_band": height_band,
            "weight_band": weight_band,
            "gender": self.gender.value,
            "activity_level": self.activity_level.value,
        }


def _is_positive_number(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0
