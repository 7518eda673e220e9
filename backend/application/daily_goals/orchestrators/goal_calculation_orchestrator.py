"""GoalCalculationOrchestrator - computes, stores and caches daily goals."""

import asyncio
import logging
import weakref
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    stop_after_attempt,
    wait_exponential,
)

from domain.daily_goals.calculation.fallback_service import FallbackGoalGenerator
from domain.daily_goals.core.entities.daily_goals import DailyGoals
from domain.daily_goals.core.events.goals_calculated import GoalsCalculated
from domain.daily_goals.core.exceptions.domain_errors import (
    CalculationFailedError,
    GoalCalculationError,
    InvalidCalculationInputError,
    ProfileNotFoundError,
    StorageFailedError,
    UnexpectedGoalError,
    ValidationFailedError,
)
from domain.daily_goals.core.factories.daily_goals_factory import DailyGoalsFactory
from domain.daily_goals.core.ports.calculators import (
    ICaloriesGoalCalculator,
    IHeartPointsGoalCalculator,
    IStepsGoalCalculator,
)
from domain.daily_goals.core.ports.freshness_cache import IFreshnessCache
from domain.daily_goals.core.ports.profile_source import IGoalProfileSource
from domain.daily_goals.core.ports.repository import IGoalRepository
from domain.daily_goals.core.value_objects.breakdown import GoalCalculationBreakdown
from domain.daily_goals.core.value_objects.calculation_source import CalculationSource
from domain.daily_goals.core.value_objects.calculation_input import CalculationInput
from domain.daily_goals.core.value_objects.goal_profile import GoalProfile
from domain.daily_goals.core.value_objects.profile_fingerprint import (
    ProfileFingerprint,
)
from domain.shared.ports.event_bus import IEventBus
from infrastructure.config import GoalEngineSettings
from metrics import daily_goals as goal_metrics

logger = logging.getLogger(__name__)


class GoalState(str, Enum):
    """Lifecycle of a user's goals as seen by the orchestrator."""

    NO_GOALS = "no_goals"
    COMPUTING = "computing"
    STORED_FRESH = "stored_fresh"
    STORED_STALE = "stored_stale"
    FAILED = "failed"


@dataclass(frozen=True)
class GoalCalculationResult:
    """Outcome of ``calculate_and_store``.

    Attributes:
        user_id: User the calculation was for
        goals: Computed (or cached) goals; present on success and on
            storage failure
        was_recalculated: Formulas actually ran (False on a cache hit)
        error: Error from the closed taxonomy, None on success
        fallback_goals: Conservative goals offered with a calculation
            failure; never stored
    """

    user_id: str
    goals: Optional[DailyGoals] = None
    was_recalculated: bool = False
    error: Optional[GoalCalculationError] = None
    fallback_goals: Optional[DailyGoals] = None

    @property
    def is_success(self) -> bool:
        return self.error is None and self.goals is not None

    @property
    def is_durable(self) -> bool:
        """Goals were persisted (or already were, on a cache hit)."""
        return self.is_success

    @staticmethod
    def success(goals: DailyGoals, was_recalculated: bool) -> "GoalCalculationResult":
        return GoalCalculationResult(
            user_id=goals.user_id,
            goals=goals,
            was_recalculated=was_recalculated,
        )

    @staticmethod
    def failure(
        error: GoalCalculationError,
        goals: Optional[DailyGoals] = None,
        fallback_goals: Optional[DailyGoals] = None,
    ) -> "GoalCalculationResult":
        return GoalCalculationResult(
            user_id=error.user_id,
            goals=goals,
            was_recalculated=goals is not None,
            error=error,
            fallback_goals=fallback_goals,
        )


class GoalCalculationOrchestrator:
    """
    Orchestrates daily goal calculation for a user.

    Flow:
    1. Load profile from the profile source
    2. Build and validate the calculation input
    3. Return cached goals when the profile fingerprint is unchanged
    4. Run the three calculators (skipped for full manual overrides)
    5. Persist the goals (retried with exponential backoff)
    6. Update the freshness cache and publish GoalsCalculated

    Every failure is converted into a ``GoalCalculationError`` inside the
    returned result; nothing is raised to the caller. Calls for the same
    user are serialized, calls for different users run concurrently.

    Example:
        >>> orchestrator = GoalCalculationOrchestrator(
        ...     profile_source, repository, cache,
        ...     StepsGoalService(), CaloriesGoalService(), HeartPointsGoalService(),
        ... )
        >>> result = await orchestrator.calculate_and_store("user123")
        >>> result.goals.calculation_source
        <CalculationSource.WHO_STANDARD: 'who_standard'>
    """

    def __init__(
        self,
        profile_source: IGoalProfileSource,
        repository: IGoalRepository,
        cache: IFreshnessCache,
        steps_calculator: IStepsGoalCalculator,
        calories_calculator: ICaloriesGoalCalculator,
        heart_points_calculator: IHeartPointsGoalCalculator,
        fallback_generator: Optional[FallbackGoalGenerator] = None,
        event_bus: Optional[IEventBus] = None,
        settings: Optional[GoalEngineSettings] = None,
        clock: Callable[[], date] = date.today,
    ):
        """
        Initialize orchestrator.

        Args:
            profile_source: Where user profiles are read from
            repository: Storage for computed goals
            cache: Freshness cache keyed by profile fingerprint
            steps_calculator: Steps goal formula
            calories_calculator: Calories goal formula
            heart_points_calculator: Heart points goal formula
            fallback_generator: Generator for goals offered on calculation failure
            event_bus: Optional bus receiving GoalsCalculated events
            settings: Retry tunables (defaults when omitted)
            clock: Returns the day ages are computed on
        """
        self._profile_source = profile_source
        self._repository = repository
        self._cache = cache
        self._steps = steps_calculator
        self._calories = calories_calculator
        self._heart_points = heart_points_calculator
        self._fallback = fallback_generator or FallbackGoalGenerator()
        self._event_bus = event_bus
        self._settings = settings or GoalEngineSettings()
        self._clock = clock

        # Locks live only while a calculation for the user holds or awaits one
        self._locks: "weakref.WeakValueDictionary[str, asyncio.Lock]" = (
            weakref.WeakValueDictionary()
        )
        self._states: Dict[str, GoalState] = {}
        self._breakdowns: Dict[str, GoalCalculationBreakdown] = {}

    async def calculate_and_store(
        self,
        user_id: str,
        force_recalculation: bool = False,
    ) -> GoalCalculationResult:
        """
        Calculate goals for a user and persist them.

        Args:
            user_id: User identifier
            force_recalculation: Ignore the freshness cache

        Returns:
            GoalCalculationResult: Goals and/or error, never raises
        """
        lock = self._lock_for(user_id)
        async with lock:
            self._states[user_id] = GoalState.COMPUTING

            with goal_metrics.time_calculation() as outcome:
                try:
                    result = await self._calculate(user_id, force_recalculation)
                except Exception as e:
                    logger.error(
                        f"Unexpected error calculating goals for user {user_id}: {e}",
                        exc_info=True,
                    )
                    result = GoalCalculationResult.failure(UnexpectedGoalError(user_id, e))

                if result.error is not None:
                    outcome.append(result.error.kind.value)

            self._states[user_id] = self._next_state(result)
            return result

    async def has_valid_goals(self, user_id: str) -> bool:
        """
        Check whether stored goals are usable as they are.

        Goals qualify when they exist, lie within safety bounds, are not
        fallback goals and were computed from the current profile.

        Args:
            user_id: User identifier

        Returns:
            bool: True if no recalculation is needed
        """
        try:
            goals = await self._repository.find_by_user_id(user_id)
            if goals is None or not goals.is_valid or goals.is_fallback():
                return False

            profile = await self._profile_source.get_profile(user_id)
            if profile is None:
                return False

            return profile.fingerprint(self._clock()).matches(goals.profile_fingerprint)
        except Exception as e:
            logger.error(
                f"Error checking goal validity for user {user_id}: {e}",
                exc_info=True,
            )
            return False

    async def get_current_goals(self, user_id: str) -> Optional[DailyGoals]:
        """
        Get stored goals, flagged stale when the profile has changed since.

        Args:
            user_id: User identifier

        Returns:
            Optional[DailyGoals]: Stored goals if any, None otherwise
        """
        try:
            goals = await self._repository.find_by_user_id(user_id)
            if goals is None:
                return None

            profile = await self._profile_source.get_profile(user_id)
            if profile is not None and profile.fingerprint(self._clock()).matches(
                goals.profile_fingerprint
            ):
                return goals

            if self._states.get(user_id) == GoalState.STORED_FRESH:
                self._states[user_id] = GoalState.STORED_STALE
            return goals.mark_stale()
        except Exception as e:
            logger.error(
                f"Error loading goals for user {user_id}: {e}",
                exc_info=True,
            )
            return None

    def last_breakdown(self, user_id: str) -> Optional[GoalCalculationBreakdown]:
        """Breakdown of the last successful formula run for the user."""
        return self._breakdowns.get(user_id)

    async def get_calculation_breakdown(
        self, user_id: str
    ) -> Optional[GoalCalculationBreakdown]:
        """
        Compute a breakdown from the current profile without storing anything.

        Args:
            user_id: User identifier

        Returns:
            Optional[GoalCalculationBreakdown]: None if the profile is missing
            or invalid
        """
        try:
            profile = await self._profile_source.get_profile(user_id)
            if profile is None:
                return None
            calculation_input = profile.to_calculation_input(self._clock())
            return self._breakdown(profile, calculation_input)
        except InvalidCalculationInputError as e:
            logger.info(
                f"Cannot build breakdown for user {user_id}: invalid profile",
                extra={"user_id": user_id, "issues": e.issues},
            )
            return None
        except Exception as e:
            logger.error(
                f"Error building breakdown for user {user_id}: {e}",
                exc_info=True,
            )
            return None

    def state_of(self, user_id: str) -> GoalState:
        return self._states.get(user_id, GoalState.NO_GOALS)

    async def invalidate(self, user_id: str) -> None:
        """
        Forget cached goals after a profile change.

        Stored goals stay in the repository but are reported stale until
        the next calculation.
        """
        await self._cache.invalidate(user_id)
        if self._states.get(user_id) == GoalState.STORED_FRESH:
            self._states[user_id] = GoalState.STORED_STALE

    # ============================================================
    # Internals
    # ============================================================

    async def _calculate(
        self, user_id: str, force_recalculation: bool
    ) -> GoalCalculationResult:
        profile = await self._profile_source.get_profile(user_id)
        if profile is None:
            logger.info(f"No profile for user {user_id}, cannot calculate goals")
            return GoalCalculationResult.failure(ProfileNotFoundError(user_id))

        today = self._clock()
        try:
            calculation_input = profile.to_calculation_input(today)
        except InvalidCalculationInputError as e:
            logger.warning(
                "Goal calculation input failed validation",
                extra={"user_id": user_id, "issues": e.issues},
            )
            return GoalCalculationResult.failure(ValidationFailedError(user_id, e.issues))

        fingerprint = profile.fingerprint(today)

        if not force_recalculation:
            cached = await self._cache.get(user_id, fingerprint)
            if cached is not None:
                goal_metrics.record_cache_hit()
                logger.debug(f"Using cached goals for user {user_id}")
                return GoalCalculationResult.success(cached, was_recalculated=False)
            goal_metrics.record_cache_miss()

        logger.info(
            "Calculating daily goals",
            extra={
                "user_id": user_id,
                "forced": force_recalculation,
                "profile": calculation_input.sanitize_for_logging(),
            },
        )

        try:
            goals, breakdown = self._compute(profile, calculation_input, fingerprint)
        except Exception as e:
            logger.error(
                f"Goal calculation failed for user {user_id}: {e}",
                exc_info=True,
            )
            fallback = self._fallback.generate_for_error(user_id, e, profile, today)
            goal_metrics.record_fallback(FallbackGoalGenerator.reason_for(e))
            return GoalCalculationResult.failure(
                CalculationFailedError(user_id, e),
                fallback_goals=fallback,
            )

        try:
            await self._save_with_retry(goals)
        except Exception as e:
            logger.error(
                f"Failed to store goals for user {user_id} after "
                f"{self._settings.storage_retry_attempts} attempts: {e}",
                extra={"user_id": user_id, "goals": goals.sanitize_for_logging()},
            )
            return GoalCalculationResult.failure(StorageFailedError(user_id, e), goals=goals)

        await self._cache.put(user_id, fingerprint, goals)
        if breakdown is not None:
            self._breakdowns[user_id] = breakdown
        else:
            self._breakdowns.pop(user_id, None)

        await self._publish(goals)

        logger.info(
            f"Stored daily goals for user {user_id}: {goals.sanitize_for_logging()}"
        )
        return GoalCalculationResult.success(goals, was_recalculated=True)

    def _compute(
        self,
        profile: GoalProfile,
        calculation_input: CalculationInput,
        fingerprint: ProfileFingerprint,
    ) -> Tuple[DailyGoals, Optional[GoalCalculationBreakdown]]:
        # All three goals overridden: the formulas have nothing to contribute
        if profile.override_source() == CalculationSource.MANUAL:
            return DailyGoalsFactory.create(profile, fingerprint), None

        breakdown = self._breakdown(profile, calculation_input)
        goals = DailyGoalsFactory.create(
            profile,
            fingerprint,
            steps_goal=_final_goal(breakdown.steps),
            calories_goal=_final_goal(breakdown.calories),
            heart_points_goal=_final_goal(breakdown.heart_points),
        )
        return goals, breakdown

    def _breakdown(
        self, profile: GoalProfile, calculation_input: CalculationInput
    ) -> GoalCalculationBreakdown:
        steps = None
        calories = None
        heart_points = None
        if profile.steps_goal_override is None:
            steps = self._steps.breakdown(calculation_input)
        if profile.calories_goal_override is None:
            calories = self._calories.breakdown(calculation_input)
        if profile.heart_points_goal_override is None:
            heart_points = self._heart_points.breakdown(calculation_input)

        return GoalCalculationBreakdown(
            steps=steps,
            calories=calories,
            heart_points=heart_points,
            age=calculation_input.age,
            gender=calculation_input.gender,
            activity_level=calculation_input.activity_level,
        )

    async def _save_with_retry(self, goals: DailyGoals) -> None:
        settings = self._settings
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(settings.storage_retry_attempts),
            wait=wait_exponential(
                multiplier=settings.storage_retry_min_wait_s,
                min=settings.storage_retry_min_wait_s,
                max=settings.storage_retry_max_wait_s,
            ),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                await self._repository.save(goals)

    async def _publish(self, goals: DailyGoals) -> None:
        if self._event_bus is None:
            return
        event = GoalsCalculated.create(
            user_id=goals.user_id,
            steps_goal=goals.steps_goal,
            calories_goal=goals.calories_goal,
            heart_points_goal=goals.heart_points_goal,
            calculation_source=goals.calculation_source,
            profile_fingerprint=goals.profile_fingerprint or "",
        )
        try:
            await self._event_bus.publish(event)
        except Exception as e:
            # Goals are already stored at this point
            logger.error(
                f"Failed to publish GoalsCalculated for user {goals.user_id}: {e}",
                exc_info=True,
            )

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock

    @staticmethod
    def _next_state(result: GoalCalculationResult) -> GoalState:
        if result.is_success:
            return GoalState.STORED_FRESH
        return GoalState.FAILED


def _final_goal(component) -> Optional[int]:
    return None if component is None else component.final_goal
