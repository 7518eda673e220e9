"""AgeBand value object - WHO physical activity age groups."""

from enum import Enum

YOUTH_MIN_AGE = 13
ADULT_MIN_AGE = 18
OLDER_ADULT_MIN_AGE = 65


class AgeBand(str, Enum):
    """WHO Physical Activity Guidelines 2020 age groups.

    Each band includes the age it starts at: 13 is youth, 18 is adult,
    65 is older adult.
    """

    YOUTH = "youth"
    ADULT = "adult"
    OLDER_ADULT = "older_adult"

    @staticmethod
    def for_age(age: int) -> "AgeBand":
        """Classify an age in years.

        Args:
            age: Age in completed years

        Returns:
            AgeBand: Band the age belongs to
        """
        if age < ADULT_MIN_AGE:
            return AgeBand.YOUTH
        if age < OLDER_ADULT_MIN_AGE:
            return AgeBand.ADULT
        return AgeBand.OLDER_ADULT

    def activity_factor(self) -> float:
        """Multiplier applied to activity baselines (steps, heart points).

        Youth need more daily activity, older adults are adjusted for
        capability while keeping the health benefit.

        Returns:
            float: 1.2, 1.0 or 0.8
        """
        factors = {
            AgeBand.YOUTH: 1.2,
            AgeBand.ADULT: 1.0,
            AgeBand.OLDER_ADULT: 0.8,
        }
        return factors[self]
