"""Gender value object - gender selection used by goal formulas."""

from enum import Enum


class Gender(str, Enum):
    """Gender as recorded on the user profile.

    OTHER and PREFER_NOT_TO_SAY always take the gender-neutral path of
    every formula.
    """

    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer_not_to_say"

    def is_binary(self) -> bool:
        """Whether a sex-specific formula applies.

        Returns:
            bool: True for MALE and FEMALE
        """
        return self in (Gender.MALE, Gender.FEMALE)

    def display_name(self) -> str:
        names = {
            Gender.MALE: "Male",
            Gender.FEMALE: "Female",
            Gender.OTHER: "Other",
            Gender.PREFER_NOT_TO_SAY: "Prefer not to say",
        }
        return names[self]
