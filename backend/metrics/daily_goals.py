"""Instrumentation helpers for the daily goals engine.

Current metrics:
* Counter daily_goals_cache_total{result}           result: hit|miss
* Counter daily_goals_calculations_total{outcome}   outcome: success|<error kind>
* Counter daily_goals_fallback_total{reason}
* Histogram daily_goals_calculation_latency_ms{outcome}
* Counter daily_goals_recalc_triggers_total{reason}
* Counter daily_goals_stored_total{source}

NOTE:
`outcome` uses the GoalErrorKind values for failures so that dashboards
line up with the error taxonomy returned to callers.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator, List

from .core import MetricKind, RegistrySnapshot, registry

CACHE_COUNTER = "daily_goals_cache_total"
CALCULATIONS_COUNTER = "daily_goals_calculations_total"
FALLBACK_COUNTER = "daily_goals_fallback_total"
LATENCY_HISTOGRAM = "daily_goals_calculation_latency_ms"
TRIGGERS_COUNTER = "daily_goals_recalc_triggers_total"
STORED_COUNTER = "daily_goals_stored_total"

registry.declare(
    CACHE_COUNTER, MetricKind.COUNTER, "Freshness cache lookups", labels=("result",)
)
registry.declare(
    CALCULATIONS_COUNTER,
    MetricKind.COUNTER,
    "calculate_and_store calls by outcome",
    labels=("outcome",),
)
registry.declare(
    FALLBACK_COUNTER,
    MetricKind.COUNTER,
    "Fallback goals offered after a calculator failure",
    labels=("reason",),
)
registry.declare(
    LATENCY_HISTOGRAM,
    MetricKind.HISTOGRAM,
    "calculate_and_store latency in milliseconds",
    labels=("outcome",),
)
registry.declare(
    TRIGGERS_COUNTER,
    MetricKind.COUNTER,
    "Recalculations scheduled or forced",
    labels=("reason",),
)
registry.declare(
    STORED_COUNTER,
    MetricKind.COUNTER,
    "Goals persisted, by calculation source",
    labels=("source",),
)


def record_cache_hit() -> None:
    registry.counter(CACHE_COUNTER, result="hit").inc()


def record_cache_miss() -> None:
    registry.counter(CACHE_COUNTER, result="miss").inc()


def record_outcome(outcome: str) -> None:
    registry.counter(CALCULATIONS_COUNTER, outcome=outcome).inc()


def record_fallback(reason: str) -> None:
    registry.counter(FALLBACK_COUNTER, reason=reason).inc()


def record_latency_ms(ms: float, *, outcome: str) -> None:
    registry.histogram(LATENCY_HISTOGRAM, outcome=outcome).observe(ms)


def record_trigger(reason: str) -> None:
    """Count a scheduled recalculation (reason: created|changed|forced)."""
    registry.counter(TRIGGERS_COUNTER, reason=reason).inc()


def record_stored(source: str) -> None:
    registry.counter(STORED_COUNTER, source=source).inc()


@contextmanager
def time_calculation() -> Iterator[List[str]]:
    """Time a calculation and record its outcome.

    The caller appends the outcome to the yielded list; "success" is
    assumed when nothing is appended and the block exits normally.
    """
    outcome: List[str] = []
    start = time.perf_counter()
    try:
        yield outcome
    except Exception:
        outcome.append("unexpected_error")
        raise
    finally:
        final = outcome[-1] if outcome else "success"
        record_outcome(final)
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        record_latency_ms(elapsed_ms, outcome=final)


def snapshot() -> RegistrySnapshot:
    return registry.snapshot()


def reset_all() -> None:
    """Reset every metric (test utility)."""
    registry.reset()
