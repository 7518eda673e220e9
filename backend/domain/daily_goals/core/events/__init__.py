"""Domain events for daily goals."""

from .base import DomainEvent
from .goals_calculated import GoalsCalculated

__all__ = ["DomainEvent", "GoalsCalculated"]
