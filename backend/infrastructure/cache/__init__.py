"""Cache implementations."""

from infrastructure.cache.in_memory_freshness_cache import (
    InMemoryFreshnessCache,
)

__all__ = [
    "InMemoryFreshnessCache",
]
