"""FallbackGoalGenerator - conservative goals for when calculation fails."""

import logging
from datetime import date
from typing import Optional

from ..core.entities.daily_goals import DailyGoals
from ..core.exceptions.domain_errors import InvalidCalculationInputError
from ..core.value_objects.age_band import AgeBand
from ..core.value_objects.calculation_source import CalculationSource
from ..core.value_objects.gender import Gender
from ..core.value_objects.goal_bounds import GoalBounds
from ..core.value_objects.goal_profile import GoalProfile

logger = logging.getLogger(__name__)

FALLBACK_STEPS_GOAL = 7500
FALLBACK_CALORIES_GOAL = 1800
FALLBACK_HEART_POINTS_GOAL = 21

FALLBACK_STEPS_BOUNDS = GoalBounds(6000, 9000)
FALLBACK_CALORIES_BOUNDS = GoalBounds(1400, 2400)
FALLBACK_HEART_POINTS_BOUNDS = GoalBounds(17, 25)

# Wider range accepted when checking an existing fallback result
ACCEPTED_STEPS_BOUNDS = GoalBounds(5000, 10000)
ACCEPTED_CALORIES_BOUNDS = GoalBounds(1200, 2500)
ACCEPTED_HEART_POINTS_BOUNDS = GoalBounds(15, 30)

INVALID_INPUT_REASON = "Invalid input data"
ARITHMETIC_REASON = "Mathematical calculation error"
MISSING_DATA_REASON = "Missing required data"
UNEXPECTED_REASON = "Unexpected calculation error"

_BASE_EXPLANATION = (
    "We've set safe default wellness goals for you based on WHO health guidelines.\n"
    "\n"
    "Your current goals:\n"
    "- Steps: Encourages daily movement for cardiovascular health\n"
    "- Calories: Supports healthy metabolism and energy balance\n"
    "- Heart Points: Meets WHO recommendations for moderate activity\n"
    "\n"
    "These goals provide proven health benefits and are achievable for most people."
)

_REASON_GUIDANCE = {
    INVALID_INPUT_REASON: (
        "To get personalized goals, please complete your profile with accurate "
        "height, weight, and birthday information."
    ),
    MISSING_DATA_REASON: (
        "Complete your profile to receive goals calculated specifically for "
        "your age, gender, and physical characteristics."
    ),
}
_DEFAULT_GUIDANCE = (
    "You can update your profile anytime to receive personalized goal calculations."
)


class FallbackGoalGenerator:
    """Generate safe, conservative goals when personalized calculation fails.

    Goals start from moderate defaults (7500 steps, 1800 kcal, 21 heart
    points) and apply small age and gender adjustments when the profile
    provides them. Results are always ``FALLBACK_DEFAULT`` and are never
    persisted by the orchestrator.
    """

    def generate(
        self,
        user_id: str,
        profile: Optional[GoalProfile] = None,
        reason: Optional[str] = None,
        today: Optional[date] = None,
    ) -> DailyGoals:
        """Generate fallback goals.

        Args:
            user_id: User identifier
            profile: Profile to take age and gender from, if available
            reason: Short failure reason, used for logging
            today: Day the age is computed on (defaults to today)

        Returns:
            DailyGoals: Fallback goals with source FALLBACK_DEFAULT
        """
        logger.info(
            f"Generating fallback goals for user {user_id}. Reason: {reason or 'Unknown'}"
        )

        age = _safe_age(profile, today or date.today())
        gender = profile.gender if profile is not None else None

        goals = DailyGoals.create(
            user_id=user_id,
            steps_goal=self._steps_goal(age, gender),
            calories_goal=self._calories_goal(age, gender),
            heart_points_goal=self._heart_points_goal(age),
            calculation_source=CalculationSource.FALLBACK_DEFAULT,
        )

        logger.debug(f"Generated fallback goals: {goals.sanitize_for_logging()}")
        return goals

    def generate_for_error(
        self,
        user_id: str,
        error: BaseException,
        profile: Optional[GoalProfile] = None,
        today: Optional[date] = None,
    ) -> DailyGoals:
        """Generate fallback goals after a calculation error.

        The error is classified into a short reason for the log record.
        """
        reason = self.reason_for(error)
        logger.warning(f"Generating fallback goals due to error: {reason}")
        return self.generate(user_id, profile=profile, reason=reason, today=today)

    @staticmethod
    def reason_for(error: BaseException) -> str:
        if isinstance(error, (ValueError, TypeError)):
            return INVALID_INPUT_REASON
        if isinstance(error, ArithmeticError):
            return ARITHMETIC_REASON
        if isinstance(error, (AttributeError, KeyError, LookupError)):
            return MISSING_DATA_REASON
        return UNEXPECTED_REASON

    def explanation(self, reason: Optional[str] = None) -> str:
        """User-facing explanation of fallback goals.

        Args:
            reason: Failure reason from ``reason_for``

        Returns:
            str: Explanation with guidance matching the reason
        """
        guidance = _REASON_GUIDANCE.get(reason or "", _DEFAULT_GUIDANCE)
        return f"{_BASE_EXPLANATION}\n\n{guidance}"

    def validate(self, goals: DailyGoals) -> bool:
        """Check that goals look like fallback goals within safe ranges."""
        is_valid = (
            ACCEPTED_STEPS_BOUNDS.contains(goals.steps_goal)
            and ACCEPTED_CALORIES_BOUNDS.contains(goals.calories_goal)
            and ACCEPTED_HEART_POINTS_BOUNDS.contains(goals.heart_points_goal)
            and goals.is_fallback()
        )
        if not is_valid:
            logger.error(
                f"Fallback goals failed validation: {goals.sanitize_for_logging()}"
            )
        return is_valid

    def emergency(self, user_id: str) -> DailyGoals:
        """Most conservative goals, used when nothing else is available."""
        logger.warning("Creating emergency fallback goals")
        return DailyGoals.create(
            user_id=user_id,
            steps_goal=6000,
            calories_goal=1600,
            heart_points_goal=18,
            calculation_source=CalculationSource.FALLBACK_DEFAULT,
        )

    def _steps_goal(self, age: Optional[int], gender: Optional[Gender]) -> int:
        age_adjustment = _age_adjustment(age, youth=1.1, older_adult=0.9)
        gender_adjustment = {Gender.MALE: 1.02, Gender.FEMALE: 0.98}.get(gender, 1.0)
        adjusted = int(FALLBACK_STEPS_GOAL * age_adjustment * gender_adjustment)
        return FALLBACK_STEPS_BOUNDS.clamp(adjusted)

    def _calories_goal(self, age: Optional[int], gender: Optional[Gender]) -> int:
        age_adjustment = _age_adjustment(age, youth=1.15, older_adult=0.9)
        gender_adjustment = {Gender.MALE: 1.15, Gender.FEMALE: 0.9}.get(gender, 1.0)
        adjusted = int(FALLBACK_CALORIES_GOAL * age_adjustment * gender_adjustment)
        return FALLBACK_CALORIES_BOUNDS.clamp(adjusted)

    def _heart_points_goal(self, age: Optional[int]) -> int:
        age_adjustment = _age_adjustment(age, youth=1.1, older_adult=0.85)
        adjusted = int(FALLBACK_HEART_POINTS_GOAL * age_adjustment)
        return FALLBACK_HEART_POINTS_BOUNDS.clamp(adjusted)


def _age_adjustment(age: Optional[int], youth: float, older_adult: float) -> float:
    if age is None:
        return 1.0
    band = AgeBand.for_age(age)
    if band == AgeBand.YOUTH:
        return youth
    if band == AgeBand.OLDER_ADULT:
        return older_adult
    return 1.0


def _safe_age(profile: Optional[GoalProfile], today: date) -> Optional[int]:
    if profile is None or profile.birthdate is None:
        return None
    try:
        return profile.age_on(today)
    except (TypeError, AttributeError, ValueError, InvalidCalculationInputError):
        logger.debug("Could not derive age from profile for fallback goals")
        return None
