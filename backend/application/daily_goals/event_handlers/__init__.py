"""Daily goals event handlers."""

from .goals_calculated_handler import GoalsCalculatedHandler

__all__ = ["GoalsCalculatedHandler"]
