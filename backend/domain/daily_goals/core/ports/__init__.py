"""Ports for daily goals domain."""

from .calculators import (
    ICaloriesGoalCalculator,
    IHeartPointsGoalCalculator,
    IStepsGoalCalculator,
)
from .freshness_cache import IFreshnessCache
from .profile_source import IGoalProfileSource
from .repository import IGoalRepository

__all__ = [
    "IStepsGoalCalculator",
    "ICaloriesGoalCalculator",
    "IHeartPointsGoalCalculator",
    "IFreshnessCache",
    "IGoalProfileSource",
    "IGoalRepository",
]
