"""CaloriesGoalService - daily calorie expenditure goal calculation."""

import math

from ..core.ports.calculators import ICaloriesGoalCalculator
from ..core.value_objects.breakdown import CaloriesBreakdown
from ..core.value_objects.calculation_input import CalculationInput
from ..core.value_objects.gender import Gender
from ..core.value_objects.goal_bounds import CALORIES_BOUNDS

HARRIS_BENEDICT = "Harris-Benedict Revised (1984)"
MIFFLIN_ST_JEOR = "Mifflin-St Jeor (1990)"


class CaloriesGoalService(ICaloriesGoalCalculator):
    """Calculate daily calorie expenditure goal (TDEE).

    BMR depends on the gender selection:

    Formula:
        Men:    BMR = 88.362 + 13.397 × weight + 4.799 × height - 5.677 × age
        Women:  BMR = 447.593 + 9.247 × weight + 3.098 × height - 4.330 × age
        Others: BMR = 10 × weight + 6.25 × height - 5 × age + 5

    TDEE = BMR × activity factor, rounded half-up and clamped to
    1200-4000 kcal.

    References:
        Roza AM, Shizgal HM. The Harris Benedict equation reevaluated.
        Am J Clin Nutr. 1984;40(1):168-182.
        Mifflin MD, St Jeor ST, Hill LA, et al. A new predictive equation
        for resting energy expenditure in healthy individuals.
        Am J Clin Nutr. 1990;51(2):241-247.
    """

    def calculate(self, calculation_input: CalculationInput) -> int:
        """Calculate calories goal.

        Args:
            calculation_input: Validated calculation input

        Returns:
            int: Daily calorie expenditure goal in kcal

        Example:
            >>> service = CaloriesGoalService()
            >>> data = CalculationInput.create(
            ...     30, Gender.MALE, 180.0, 75.0, ActivityLevel.SEDENTARY
            ... )
            >>> service.calculate(data)
            2144
        """
        return self.breakdown(calculation_input).final_goal

    def calculate_bmr(self, calculation_input: CalculationInput) -> float:
        """Calculate Basal Metabolic Rate.

        Returns:
            float: BMR in kcal/day
        """
        w = calculation_input.weight_kg
        h = calculation_input.height_cm
        age = calculation_input.age

        if calculation_input.gender == Gender.MALE:
            return 88.362 + (13.397 * w) + (4.799 * h) - (5.677 * age)
        if calculation_input.gender == Gender.FEMALE:
            return 447.593 + (9.247 * w) + (3.098 * h) - (4.330 * age)
        # Gender-neutral equation for OTHER / PREFER_NOT_TO_SAY
        return (10 * w) + (6.25 * h) - (5 * age) + 5

    def equation_name(self, gender: Gender) -> str:
        if gender.is_binary():
            return HARRIS_BENEDICT
        return MIFFLIN_ST_JEOR

    def breakdown(self, calculation_input: CalculationInput) -> CaloriesBreakdown:
        bmr = self.calculate_bmr(calculation_input)
        factor = calculation_input.activity_level.factor()
        tdee = bmr * factor
        rounded = _round_half_up(tdee)
        return CaloriesBreakdown(
            bmr=bmr,
            equation=self.equation_name(calculation_input.gender),
            activity_level=calculation_input.activity_level,
            activity_factor=factor,
            tdee=tdee,
            rounded_goal=rounded,
            final_goal=CALORIES_BOUNDS.clamp(rounded),
        )


def _round_half_up(value: float) -> int:
    # Overflowed TDEE from extreme measurements saturates at the bounds
    if not math.isfinite(value):
        return CALORIES_BOUNDS.maximum if value > 0 else CALORIES_BOUNDS.minimum
    return int(math.floor(value + 0.5))
