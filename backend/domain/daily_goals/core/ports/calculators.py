"""Calculator ports - interfaces for the three daily goal formulas."""

from abc import ABC, abstractmethod

from ..value_objects.breakdown import (
    CaloriesBreakdown,
    HeartPointsBreakdown,
    StepsBreakdown,
)
from ..value_objects.calculation_input import CalculationInput


class IStepsGoalCalculator(ABC):
    """Port for daily steps goal calculation."""

    @abstractmethod
    def calculate(self, calculation_input: CalculationInput) -> int:
        """Calculate steps goal.

        Args:
            calculation_input: Validated calculation input

        Returns:
            int: Steps goal within the steps safety bounds
        """
        pass

    @abstractmethod
    def breakdown(self, calculation_input: CalculationInput) -> StepsBreakdown:
        pass


class ICaloriesGoalCalculator(ABC):
    """Port for daily calorie expenditure goal calculation."""

    @abstractmethod
    def calculate(self, calculation_input: CalculationInput) -> int:
        """Calculate calories goal.

        Args:
            calculation_input: Validated calculation input

        Returns:
            int: Calories goal within the calories safety bounds
        """
        pass

    @abstractmethod
    def breakdown(self, calculation_input: CalculationInput) -> CaloriesBreakdown:
        pass


class IHeartPointsGoalCalculator(ABC):
    """Port for daily heart points goal calculation."""

    @abstractmethod
    def calculate(self, calculation_input: CalculationInput) -> int:
        """Calculate heart points goal.

        Args:
            calculation_input: Validated calculation input

        Returns:
            int: Heart points goal within the heart points safety bounds
        """
        pass

    @abstractmethod
    def breakdown(self, calculation_input: CalculationInput) -> HeartPointsBreakdown:
        pass
