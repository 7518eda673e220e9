"""In-process metrics registry for the daily goals engine.

Every metric is declared once with its kind, description and label names
(see ``metrics.daily_goals``). Recording a series with a different label
set raises ``ValueError``, so a typo in a label never silently creates a
new series.

Snapshots are grouped per metric and always list declared metrics, even
before the first observation, so ``/metrics`` documents what the engine
measures.
"""

from __future__ import annotations

import time
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from threading import Lock
from typing import Deque, Dict, List, Tuple, TypedDict, Union

LabelValues = Tuple[str, ...]

# Observations kept per histogram series for percentiles
HISTOGRAM_WINDOW = 1000


class MetricKind(str, Enum):
    COUNTER = "counter"
    HISTOGRAM = "histogram"


@dataclass(frozen=True)
class MetricSpec:
    """Declaration of a metric.

    Attributes:
        name: Metric name, e.g. ``daily_goals_cache_total``
        kind: Counter or histogram
        description: One-line description shown in snapshots
        labels: Label names every series must provide
    """

    name: str
    kind: MetricKind
    description: str
    labels: Tuple[str, ...] = ()

    def label_values(self, labels: Dict[str, str]) -> LabelValues:
        if set(labels) != set(self.labels):
            raise ValueError(
                f"Metric {self.name} expects labels {list(self.labels)}, "
                f"got {sorted(labels)}"
            )
        return tuple(str(labels[name]) for name in self.labels)


class CounterSeries(TypedDict):
    labels: Dict[str, str]
    value: int


class HistogramSummary(TypedDict):
    count: int
    avg: float
    p50: float
    p95: float
    max: float


class HistogramSeries(TypedDict):
    labels: Dict[str, str]
    summary: HistogramSummary


class MetricSnapshot(TypedDict):
    type: str
    description: str
    series: List[Union[CounterSeries, HistogramSeries]]


class RegistrySnapshot(TypedDict):
    metrics: Dict[str, MetricSnapshot]
    generatedAt: float


@dataclass
class Counter:
    labels: Dict[str, str]
    _value: int = 0
    _lock: Lock = field(default_factory=Lock, repr=False)

    def inc(self, amount: int = 1) -> None:
        if amount < 0:
            raise ValueError("Counters cannot decrease")
        with self._lock:
            self._value += amount

    def value(self) -> int:
        with self._lock:
            return self._value


@dataclass
class Histogram:
    """Latency-style series.

    ``count`` covers every observation; averages and percentiles cover
    the most recent ``HISTOGRAM_WINDOW`` ones.
    """

    labels: Dict[str, str]
    _window: Deque[float] = field(
        default_factory=lambda: deque(maxlen=HISTOGRAM_WINDOW), repr=False
    )
    _count: int = 0
    _lock: Lock = field(default_factory=Lock, repr=False)

    def observe(self, value: float) -> None:
        with self._lock:
            self._window.append(value)
            self._count += 1

    def summary(self) -> HistogramSummary:
        with self._lock:
            values = sorted(self._window)
            count = self._count
        if not values:
            return {"count": 0, "avg": 0.0, "p50": 0.0, "p95": 0.0, "max": 0.0}
        return {
            "count": count,
            "avg": sum(values) / len(values),
            "p50": _percentile(values, 0.50),
            "p95": _percentile(values, 0.95),
            "max": values[-1],
        }


class MetricsRegistry:
    def __init__(self) -> None:
        self._specs: Dict[str, MetricSpec] = {}
        self._counters: Dict[str, Dict[LabelValues, Counter]] = {}
        self._histograms: Dict[str, Dict[LabelValues, Histogram]] = {}
        self._lock = Lock()

    def declare(
        self,
        name: str,
        kind: MetricKind,
        description: str,
        labels: Tuple[str, ...] = (),
    ) -> MetricSpec:
        """Register a metric; declaring the same metric twice is a no-op.

        Raises:
            ValueError: If the name is already declared differently
        """
        spec = MetricSpec(name=name, kind=kind, description=description, labels=tuple(labels))
        with self._lock:
            existing = self._specs.get(name)
            if existing is not None and existing != spec:
                raise ValueError(f"Metric {name} already declared as {existing}")
            self._specs[name] = spec
        return spec

    def counter(self, name: str, **labels: str) -> Counter:
        spec = self._spec(name, MetricKind.COUNTER)
        key = spec.label_values(labels)
        with self._lock:
            series = self._counters.setdefault(name, {})
            ctr = series.get(key)
            if ctr is None:
                ctr = Counter(labels=dict(zip(spec.labels, key)))
                series[key] = ctr
            return ctr

    def histogram(self, name: str, **labels: str) -> Histogram:
        spec = self._spec(name, MetricKind.HISTOGRAM)
        key = spec.label_values(labels)
        with self._lock:
            series = self._histograms.setdefault(name, {})
            hist = series.get(key)
            if hist is None:
                hist = Histogram(labels=dict(zip(spec.labels, key)))
                series[key] = hist
            return hist

    def counter_value(self, name: str, **labels: str) -> int:
        """Current value of a counter series, 0 if it was never incremented."""
        spec = self._spec(name, MetricKind.COUNTER)
        key = spec.label_values(labels)
        with self._lock:
            ctr = self._counters.get(name, {}).get(key)
        return ctr.value() if ctr is not None else 0

    def reset(self) -> None:
        """Drop recorded series; declarations are kept."""
        with self._lock:
            self._counters.clear()
            self._histograms.clear()

    def snapshot(self) -> RegistrySnapshot:
        with self._lock:
            specs = list(self._specs.values())
            counters = {name: list(s.values()) for name, s in self._counters.items()}
            histograms = {name: list(s.values()) for name, s in self._histograms.items()}

        metrics: Dict[str, MetricSnapshot] = {}
        for spec in specs:
            series: List[Union[CounterSeries, HistogramSeries]] = []
            if spec.kind == MetricKind.COUNTER:
                for ctr in counters.get(spec.name, []):
                    series.append({"labels": ctr.labels, "value": ctr.value()})
            else:
                for hist in histograms.get(spec.name, []):
                    series.append({"labels": hist.labels, "summary": hist.summary()})
            metrics[spec.name] = {
                "type": spec.kind.value,
                "description": spec.description,
                "series": series,
            }
        return {"metrics": metrics, "generatedAt": time.time()}

    def _spec(self, name: str, kind: MetricKind) -> MetricSpec:
        with self._lock:
            spec = self._specs.get(name)
        if spec is None:
            raise KeyError(f"Metric {name} is not declared")
        if spec.kind != kind:
            raise ValueError(f"Metric {name} is a {spec.kind.value}, not a {kind.value}")
        return spec


def _percentile(sorted_values: List[float], fraction: float) -> float:
    return sorted_values[int(fraction * (len(sorted_values) - 1))]


registry = MetricsRegistry()
