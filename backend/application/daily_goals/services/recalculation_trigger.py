"""RecalculationTriggerService - recalculates goals when profiles change.

Decides whether a profile update affects goal calculation, debounces
rapid successive edits per user and keeps a bounded history of what was
triggered and how it went.
"""

import asyncio
import logging
import time
from collections import deque
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Callable, Deque, Dict, List, Optional

from domain.daily_goals.core.exceptions.domain_errors import (
    InvalidCalculationInputError,
)
from domain.daily_goals.core.value_objects.goal_profile import GoalProfile
from infrastructure.config import GoalEngineSettings
from metrics import daily_goals as goal_metrics

from ..orchestrators.goal_calculation_orchestrator import (
    GoalCalculationOrchestrator,
    GoalCalculationResult,
)

logger = logging.getLogger(__name__)

NEW_PROFILE_REASON = "New profile created"
BECAME_VALID_REASON = "Profile became valid for calculation"
BECAME_INVALID_REASON = "Profile became invalid for calculation"


@dataclass(frozen=True)
class TriggerEvent:
    """Record of one triggered recalculation.

    Attributes:
        user_id: User the recalculation was for
        reason: Why it was triggered
        success: Whether goals were produced and stored
        occurred_at: When the recalculation finished (UTC)
        duration_ms: Time spent in the orchestrator
        was_recalculated: Formulas ran (False on a cache hit)
        error_message: Error text on failure
    """

    user_id: str
    reason: str
    success: bool
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    duration_ms: Optional[float] = None
    was_recalculated: Optional[bool] = None
    error_message: Optional[str] = None


class RecalculationTriggerService:
    """Schedules goal recalculation in response to profile updates.

    Profile updates that touch goal-affecting fields schedule a
    recalculation after ``debounce_seconds``; a newer update for the same
    user cancels the pending one. Forced recalculations run immediately.

    Example:
        >>> service = RecalculationTriggerService(orchestrator)
        >>> await service.on_profile_updated(old_profile, new_profile)
        'Profile fields changed: weight_kg'
    """

    def __init__(
        self,
        orchestrator: GoalCalculationOrchestrator,
        settings: Optional[GoalEngineSettings] = None,
        clock: Callable[[], date] = date.today,
    ):
        settings = settings or GoalEngineSettings()
        self._orchestrator = orchestrator
        self._debounce_seconds = settings.recalc_debounce_s
        self._clock = clock
        self._pending: Dict[str, "asyncio.Task[None]"] = {}
        self._history: Deque[TriggerEvent] = deque(maxlen=settings.trigger_history_size)

    async def on_profile_updated(
        self,
        old_profile: Optional[GoalProfile],
        new_profile: GoalProfile,
    ) -> Optional[str]:
        """
        React to a profile update.

        Args:
            old_profile: Profile before the update (None for a new profile)
            new_profile: Profile after the update

        Returns:
            The trigger reason if a recalculation was scheduled, None otherwise
        """
        user_id = new_profile.user_id
        reason = self.trigger_reason(old_profile, new_profile)
        if reason is None:
            logger.debug(f"Profile update doesn't require goal recalculation for user {user_id}")
            return None

        logger.info(
            "Profile update triggers goal recalculation",
            extra={"user_id": user_id, "reason": reason},
        )
        goal_metrics.record_trigger("created" if old_profile is None else "changed")

        await self._orchestrator.invalidate(user_id)
        self._cancel_pending(user_id)
        task = asyncio.create_task(self._debounced_recalculation(user_id, reason))
        self._pending[user_id] = task
        task.add_done_callback(lambda done, uid=user_id: self._forget(uid, done))
        return reason

    async def force_recalculation(self, user_id: str, reason: str) -> GoalCalculationResult:
        """
        Cancel pending work and recalculate immediately, bypassing the cache.

        Args:
            user_id: User identifier
            reason: Why the recalculation was requested

        Returns:
            GoalCalculationResult from the orchestrator
        """
        self._cancel_pending(user_id)
        goal_metrics.record_trigger("forced")
        logger.info(
            "Forcing immediate goal recalculation",
            extra={"user_id": user_id, "reason": reason},
        )
        return await self._run(user_id, reason, force_recalculation=True)

    def trigger_reason(
        self,
        old_profile: Optional[GoalProfile],
        new_profile: GoalProfile,
    ) -> Optional[str]:
        """Why a profile update needs recalculation, None if it doesn't."""
        if old_profile is None:
            return NEW_PROFILE_REASON

        was_valid = self._is_calculable(old_profile)
        is_valid = self._is_calculable(new_profile)
        if not was_valid and is_valid:
            return BECAME_VALID_REASON
        if was_valid and not is_valid:
            return BECAME_INVALID_REASON
        if not is_valid:
            return None

        changes = old_profile.changed_goal_fields(new_profile)
        if changes:
            return f"Profile fields changed: {', '.join(changes)}"
        return None

    def history(self, user_id: Optional[str] = None) -> List[TriggerEvent]:
        """Trigger events, oldest first, optionally for one user."""
        if user_id is None:
            return list(self._history)
        return [event for event in self._history if event.user_id == user_id]

    def clear_history(self) -> None:
        self._history.clear()
        logger.debug("Trigger history cleared")

    def pending_count(self) -> int:
        return len(self._pending)

    def cancel_all(self) -> None:
        """Cancel every pending debounced recalculation."""
        for task in list(self._pending.values()):
            task.cancel()
        self._pending.clear()
        logger.debug("All pending recalculations cancelled")

    # ============================================================
    # Internals
    # ============================================================

    async def _debounced_recalculation(self, user_id: str, reason: str) -> None:
        try:
            await asyncio.sleep(self._debounce_seconds)
        except asyncio.CancelledError:
            logger.debug(f"Recalculation cancelled for user {user_id}")
            raise
        await self._run(user_id, reason, force_recalculation=False)

    async def _run(
        self, user_id: str, reason: str, force_recalculation: bool
    ) -> GoalCalculationResult:
        start = time.perf_counter()
        result = await self._orchestrator.calculate_and_store(
            user_id, force_recalculation=force_recalculation
        )
        duration_ms = (time.perf_counter() - start) * 1000.0

        if result.is_success:
            logger.info(
                f"Goal recalculation successful for user {user_id} in {duration_ms:.0f}ms"
            )
        else:
            logger.warning(
                f"Goal recalculation failed for user {user_id}: {result.error}",
                extra={"user_id": user_id, "reason": reason},
            )

        self._history.append(
            TriggerEvent(
                user_id=user_id,
                reason=reason,
                success=result.is_success,
                duration_ms=duration_ms,
                was_recalculated=result.was_recalculated if result.is_success else None,
                error_message=str(result.error) if result.error is not None else None,
            )
        )
        return result

    def _is_calculable(self, profile: GoalProfile) -> bool:
        try:
            profile.to_calculation_input(self._clock())
        except InvalidCalculationInputError:
            return False
        return True

    def _cancel_pending(self, user_id: str) -> None:
        task = self._pending.pop(user_id, None)
        if task is not None and not task.done():
            task.cancel()

    def _forget(self, user_id: str, task: "asyncio.Task[None]") -> None:
        if self._pending.get(user_id) is task:
            del self._pending[user_id]
