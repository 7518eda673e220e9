"""Event bus port (interface).

Defines contract for event publishing and subscription.
Follows the Dependency Inversion Principle: domain defines the port,
infrastructure provides the implementation.
"""

from typing import Awaitable, Callable, Protocol, Type, TypeVar

from domain.daily_goals.core.events.base import DomainEvent

TEvent = TypeVar("TEvent", bound=DomainEvent)

# Event handler type: async function that takes an event and returns None
EventHandler = Callable[[TEvent], Awaitable[None]]


class IEventBus(Protocol):
    """
    Interface for event publishing and subscription.

    Example usage (application layer):
        >>> async def on_goals_calculated(event: GoalsCalculated) -> None:
        ...     print(f"New goals for {event.user_id}")
        ...
        >>> event_bus.subscribe(GoalsCalculated, on_goals_calculated)
        >>> await event_bus.publish(GoalsCalculated.create(...))
    """

    def subscribe(
        self,
        event_type: Type[TEvent],
        handler: EventHandler[TEvent],
    ) -> None:
        """
        Subscribe a handler to an event type.

        Args:
            event_type: Type of event to listen for (e.g., GoalsCalculated)
            handler: Async function to call when event is published
        """
        ...

    async def publish(self, event: TEvent) -> None:
        """
        Publish an event to all subscribed handlers.

        Args:
            event: Domain event to publish

        Note:
            - Handlers are called in subscription order
            - If a handler fails, other handlers still execute
        """
        ...

    def unsubscribe(
        self,
        event_type: Type[TEvent],
        handler: EventHandler[TEvent],
    ) -> bool:
        """
        Unsubscribe a handler from an event type.

        Returns:
            True if handler was found and removed, False otherwise
        """
        ...

    def clear(self) -> None:
        """Clear all event subscriptions."""
        ...
