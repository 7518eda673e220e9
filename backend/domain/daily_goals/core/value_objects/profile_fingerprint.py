"""ProfileFingerprint value object - comparison key for goal freshness."""

import hashlib
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .activity_level import ActivityLevel
from .gender import Gender


@dataclass(frozen=True)
class ProfileFingerprint:
    """Comparable key over the profile fields that change goal output.

    Two profiles with the same fingerprint always yield the same goals.
    The key is hashed only to keep it short and free of raw biometrics;
    it is not meant to resist tampering.

    Attributes:
        value: Hex digest of the canonical field string
    """

    value: str

    @staticmethod
    def compute(
        birthdate: date,
        age: int,
        gender: Gender,
        height_cm: float,
        weight_kg: float,
        activity_level: ActivityLevel,
        steps_override: Optional[int] = None,
        calories_override: Optional[int] = None,
        heart_points_override: Optional[int] = None,
    ) -> "ProfileFingerprint":
        """Build the fingerprint from goal-affecting fields.

        Age is part of the key because it is derived from birthdate on
        the calculation day and crosses band boundaries on birthdays.

        Returns:
            ProfileFingerprint: Deterministic key for these fields
        """
        canonical = "|".join(
            [
                birthdate.isoformat(),
                str(age),
                gender.value,
                repr(float(height_cm)),
                repr(float(weight_kg)),
                activity_level.value,
                _optional(steps_override),
                _optional(calories_override),
                _optional(heart_points_override),
            ]
        )
        digest = hashlib.blake2b(canonical.encode("utf-8"), digest_size=16)
        return ProfileFingerprint(value=digest.hexdigest())

    def matches(self, other: Optional[str]) -> bool:
        """Compare against a stored fingerprint string."""
        return other is not None and self.value == other

    def __str__(self) -> str:
        return self.value


def _optional(value: Optional[int]) -> str:
    return "-" if value is None else str(value)
