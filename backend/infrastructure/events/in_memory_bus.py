"""In-memory event bus implementation.

Provides the IEventBus port for a single process. Handlers are awaited
one after the other in subscription order.
"""

import logging
from typing import Any, Awaitable, Callable, Dict, List, Type, TypeVar

from domain.daily_goals.core.events.base import DomainEvent

logger = logging.getLogger(__name__)

TEvent = TypeVar("TEvent", bound=DomainEvent)

Handler = Callable[[Any], Awaitable[None]]


def _handler_name(handler: Handler) -> str:
    return getattr(handler, "__name__", repr(handler))


class InMemoryEventBus:
    """
    In-memory implementation of IEventBus port.

    A handler subscribed to a base event type also receives its subclasses,
    so ``subscribe(DomainEvent, audit)`` sees every event.

    Thread safety: NOT thread-safe (single event loop only)
    Persistence: Handlers lost on process restart
    Error handling: A failing handler is logged, the remaining ones still run

    Example:
        >>> bus = InMemoryEventBus()
        >>>
        >>> async def on_goals(event: GoalsCalculated) -> None:
        ...     print(f"Goals calculated: {event.user_id}")
        >>>
        >>> bus.subscribe(GoalsCalculated, on_goals)
        >>> await bus.publish(GoalsCalculated.create(...))
    """

    def __init__(self) -> None:
        """Initialize event bus with empty handler registry."""
        self._handlers: Dict[Type[DomainEvent], List[Handler]] = {}

    def subscribe(
        self,
        event_type: Type[TEvent],
        handler: Callable[[TEvent], Awaitable[None]],
    ) -> None:
        """
        Subscribe a handler to an event type.

        Args:
            event_type: Type of event to listen for
            handler: Async function to call when event is published
        """
        self._handlers.setdefault(event_type, []).append(handler)
        logger.debug(
            "Handler subscribed",
            extra={"event_type": event_type.__name__, "handler": _handler_name(handler)},
        )

    async def publish(self, event: TEvent) -> None:
        """
        Publish an event to all subscribed handlers.

        Args:
            event: Domain event to publish
        """
        handlers = self._handlers_for(type(event))
        event_name = type(event).__name__

        if not handlers:
            logger.debug("No handlers for event", extra={"event_type": event_name})
            return

        logger.info(
            "Publishing event",
            extra={
                "event_type": event_name,
                "event_id": event.event_id,
                "handler_count": len(handlers),
            },
        )

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    "Event handler failed",
                    extra={
                        "event_type": event_name,
                        "event_id": event.event_id,
                        "handler": _handler_name(handler),
                        "error": str(e),
                    },
                    exc_info=True,
                )

    def unsubscribe(
        self,
        event_type: Type[TEvent],
        handler: Callable[[TEvent], Awaitable[None]],
    ) -> bool:
        """
        Unsubscribe a handler from an event type.

        Only the first occurrence is removed if the handler was subscribed
        more than once.

        Returns:
            True if handler was found and removed, False otherwise
        """
        handlers = self._handlers.get(event_type)
        if not handlers or handler not in handlers:
            return False
        handlers.remove(handler)
        logger.debug(
            "Handler unsubscribed",
            extra={"event_type": event_type.__name__, "handler": _handler_name(handler)},
        )
        return True

    def clear(self) -> None:
        """Clear all event subscriptions (for testing)."""
        self._handlers.clear()
        logger.debug("All event handlers cleared")

    def get_handler_count(self, event_type: Type[TEvent]) -> int:
        """Number of handlers subscribed directly to an event type."""
        return len(self._handlers.get(event_type, []))

    def _handlers_for(self, event_type: Type[DomainEvent]) -> List[Handler]:
        handlers: List[Handler] = []
        for klass in event_type.__mro__:
            handlers.extend(self._handlers.get(klass, []))
        return handlers
