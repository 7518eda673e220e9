"""Entities for daily goals domain."""

from .daily_goals import DailyGoals

__all__ = ["DailyGoals"]
