"""CalculationSource value object - provenance of a DailyGoals instance."""

from enum import Enum


class CalculationSource(str, Enum):
    """Where the numbers of a DailyGoals came from."""

    WHO_STANDARD = "who_standard"
    PERSONALIZED = "personalized"
    USER_ADJUSTED = "user_adjusted"
    MANUAL = "manual"
    DEFAULT = "default"
    FALLBACK_DEFAULT = "fallback_default"

    def display_name(self) -> str:
        names = {
            CalculationSource.WHO_STANDARD: "WHO Standard",
            CalculationSource.PERSONALIZED: "Personalized Goals",
            CalculationSource.USER_ADJUSTED: "User Adjusted",
            CalculationSource.MANUAL: "Manual Goals",
            CalculationSource.DEFAULT: "Default Goals",
            CalculationSource.FALLBACK_DEFAULT: "Fallback Default",
        }
        return names[self]

    def is_override(self) -> bool:
        """Whether the numbers were supplied by the user."""
        return self in (CalculationSource.MANUAL, CalculationSource.USER_ADJUSTED)
