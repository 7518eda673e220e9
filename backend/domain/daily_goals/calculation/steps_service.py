"""StepsGoalService - daily steps goal calculation."""

from ..core.ports.calculators import IStepsGoalCalculator
from ..core.value_objects.breakdown import StepsBreakdown
from ..core.value_objects.calculation_input import CalculationInput
from ..core.value_objects.gender import Gender
from ..core.value_objects.goal_bounds import STEPS_BOUNDS

BASE_STEPS_GOAL = 10000

GENDER_FACTORS = {
    Gender.MALE: 1.05,
    Gender.FEMALE: 0.95,
    Gender.OTHER: 1.0,
    Gender.PREFER_NOT_TO_SAY: 1.0,
}


class StepsGoalService(IStepsGoalCalculator):
    """Calculate daily steps goal from WHO physical activity guidelines.

    Formula:
        steps = 10000 × age factor × gender factor, truncated

    Age factors: youth (13-17) 1.2, adult (18-64) 1.0, older adult (65+) 0.8.
    Gender factors: male 1.05, female 0.95, other/prefer not to say 1.0.
    The result is clamped to 5000-20000 steps.

    References:
        WHO guidelines on physical activity and sedentary behaviour. 2020.
    """

    def calculate(self, calculation_input: CalculationInput) -> int:
        """Calculate steps goal.

        Args:
            calculation_input: Validated calculation input

        Returns:
            int: Daily steps goal

        Example:
            >>> service = StepsGoalService()
            >>> service.calculate(CalculationInput.create(30, Gender.FEMALE, 165, 60))
            9500
        """
        return self.breakdown(calculation_input).final_goal

    def breakdown(self, calculation_input: CalculationInput) -> StepsBreakdown:
        adjusted = self._adjusted_goal(calculation_input)
        return StepsBreakdown(
            base_goal=BASE_STEPS_GOAL,
            age_adjustment=calculation_input.age_band.activity_factor(),
            gender_adjustment=GENDER_FACTORS[calculation_input.gender],
            adjusted_goal=adjusted,
            final_goal=STEPS_BOUNDS.clamp(adjusted),
        )

    def _adjusted_goal(self, calculation_input: CalculationInput) -> int:
        age_factor = calculation_input.age_band.activity_factor()
        gender_factor = GENDER_FACTORS[calculation_input.gender]
        return int(BASE_STEPS_GOAL * age_factor * gender_factor)
