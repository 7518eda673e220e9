"""GoalsCalculated domain event."""

from dataclasses import dataclass

from ..value_objects.calculation_source import CalculationSource
from .base import DomainEvent


@dataclass(frozen=True)
class GoalsCalculated(DomainEvent):
    """Event emitted when new daily goals were computed and stored.

    Attributes:
        user_id: User the goals belong to
        steps_goal: New steps goal
        calories_goal: New calories goal
        heart_points_goal: New heart points goal
        calculation_source: Provenance of the numbers
        profile_fingerprint: Fingerprint the goals were computed from
    """

    user_id: str
    steps_goal: int
    calories_goal: int
    heart_points_goal: int
    calculation_source: CalculationSource
    profile_fingerprint: str

    @staticmethod
    def create(
        user_id: str,
        steps_goal: int,
        calories_goal: int,
        heart_points_goal: int,
        calculation_source: CalculationSource,
        profile_fingerprint: str,
    ) -> "GoalsCalculated":
        return GoalsCalculated(
            event_id=DomainEvent._generate_event_id(),
            occurred_at=DomainEvent._now(),
            user_id=user_id,
            steps_goal=steps_goal,
            calories_goal=calories_goal,
            heart_points_goal=heart_points_goal,
            calculation_source=calculation_source,
            profile_fingerprint=profile_fingerprint,
        )
