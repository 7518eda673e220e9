"""Daily goal calculation services."""

from .calories_service import CaloriesGoalService
from .fallback_service import FallbackGoalGenerator
from .heart_points_service import HeartPointsGoalService
from .steps_service import StepsGoalService

__all__ = [
    "StepsGoalService",
    "CaloriesGoalService",
    "HeartPointsGoalService",
    "FallbackGoalGenerator",
]
