"""Factories for daily goals domain."""

from .daily_goals_factory import DailyGoalsFactory

__all__ = ["DailyGoalsFactory"]
