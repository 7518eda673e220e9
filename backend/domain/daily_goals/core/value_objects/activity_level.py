"""ActivityLevel value object - habitual activity level for TDEE."""

from enum import Enum


class ActivityLevel(str, Enum):
    """Habitual activity level, multiplied into BMR to get TDEE.

    - SEDENTARY: Little to no exercise, desk job
    - LIGHT: Light exercise 1-3 days/week
    - MODERATE: Moderate exercise 3-5 days/week
    - ACTIVE: Heavy exercise 6-7 days/week
    - VERY_ACTIVE: Very heavy exercise, physical job
    """

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"

    @classmethod
    def default(cls) -> "ActivityLevel":
        """Level assumed when the profile does not state one.

        Returns:
            ActivityLevel: LIGHT
        """
        return cls.LIGHT

    def factor(self) -> float:
        """Get activity factor.

        Returns:
            float: Multiplier for BMR to calculate TDEE

        Example:
            >>> ActivityLevel.MODERATE.factor()
            1.55
        """
        factors = {
            ActivityLevel.SEDENTARY: 1.2,
            ActivityLevel.LIGHT: 1.375,
            ActivityLevel.MODERATE: 1.55,
            ActivityLevel.ACTIVE: 1.725,
            ActivityLevel.VERY_ACTIVE: 1.9,
        }
        return factors[self]

    def description(self) -> str:
        """Get human-readable description.

        Returns:
            str: Activity level description
        """
        descriptions = {
            ActivityLevel.SEDENTARY: "Little to no exercise, desk job",
            ActivityLevel.LIGHT: "Light exercise 1-3 days/week",
            ActivityLevel.MODERATE: "Moderate exercise 3-5 days/week",
            ActivityLevel.ACTIVE: "Heavy exercise 6-7 days/week",
            ActivityLevel.VERY_ACTIVE: "Very heavy exercise, physical job",
        }
        return descriptions[self]
