"""Domain ports shared across domains."""

from domain.shared.ports.event_bus import IEventBus

__all__ = [
    "IEventBus",
]
