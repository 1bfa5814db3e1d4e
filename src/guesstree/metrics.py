"""metrics.py - Prometheus counters for knowledge-base activity"""

from __future__ import annotations

PROMETHEUS_AVAILABLE = False


try:
    from prometheus_client import REGISTRY, Counter

    PROMETHEUS_AVAILABLE = True

    def create_metrics(registry=None):
        registry = registry or REGISTRY
        splits_total = Counter(
            "guesstree_splits_total",
            "Total number of answer nodes split into questions",
            registry=registry,
        )
        loads_total = Counter(
            "guesstree_loads_total",
            "Total number of documents opened",
            ["source"],
            registry=registry,
        )
        saves_total = Counter(
            "guesstree_saves_total",
            "Total number of documents written to disk",
            registry=registry,
        )
        return splits_total, loads_total, saves_total

    splits_total, loads_total, saves_total = create_metrics()

except ImportError:
    splits_total = None
    loads_total = None
    saves_total = None


def record_split() -> None:
    if PROMETHEUS_AVAILABLE:
        splits_total.inc()


def record_load(source: str) -> None:
    if PROMETHEUS_AVAILABLE:
        loads_total.labels(source=source).inc()


def record_save() -> None:
    if PROMETHEUS_AVAILABLE:
        saves_total.inc()
