"""Daily goals commands."""

from .calculate_goals import CalculateGoalsCommand, CalculateGoalsHandler

__all__ = ["CalculateGoalsCommand", "CalculateGoalsHandler"]
