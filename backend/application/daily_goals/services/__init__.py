"""Daily goals application services."""

from .recalculation_trigger import RecalculationTriggerService, TriggerEvent

__all__ = ["RecalculationTriggerService", "TriggerEvent"]
