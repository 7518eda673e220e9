"""GoalBounds value object - medical safety band for a single goal."""

from dataclasses import dataclass


@dataclass(frozen=True)
class GoalBounds:
    """Inclusive safety band for a daily goal.

    Attributes:
        minimum: Lowest allowed value
        maximum: Highest allowed value
    """

    minimum: int
    maximum: int

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(
                f"Bounds minimum {self.minimum} exceeds maximum {self.maximum}"
            )

    def clamp(self, value: int) -> int:
        """Coerce a value into the band.

        Example:
            >>> GoalBounds(5000, 20000).clamp(25000)
            20000
        """
        return max(self.minimum, min(self.maximum, value))

    def contains(self, value: int) -> bool:
        return self.minimum <= value <= self.maximum

    def __str__(self) -> str:
        return f"[{self.minimum}, {self.maximum}]"


STEPS_BOUNDS = GoalBounds(minimum=5000, maximum=20000)
CALORIES_BOUNDS = GoalBounds(minimum=1200, maximum=4000)
HEART_POINTS_BOUNDS = GoalBounds(minimum=15, maximum=50)
