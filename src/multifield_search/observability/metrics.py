"""Prometheus metrics for search golden signals."""

from __future__ import annotations

from collections.abc import Mapping
from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, Counter, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


SEARCH_REQUESTS = Counter(
    "search_requests_total",
    "Total ranking passes",
    ["collection", "mode"],
)

SEARCH_LATENCY = Histogram(
    "search_latency_seconds",
    "Ranking pass latency in seconds",
    ["collection"],
    buckets=(0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

SEARCH_RESULTS = Histogram(
    "search_results",
    "Number of results returned per ranking pass",
    ["collection"],
    buckets=(0, 1, 5, 10, 25, 50, 100, 250, 1000),
)

FIELD_MATCHES = Counter(
    "search_field_matches_total",
    "Field matches by winning strategy",
    ["strategy"],
)


@contextmanager
def track_latency(collection: str = "default") -> Generator[None, None, None]:
    """Observe the wall time of the wrapped block in ``SEARCH_LATENCY``."""
    start = time.perf_counter()
    try:
        yield
    finally:
        SEARCH_LATENCY.labels(collection=collection).observe(time.perf_counter() - start)


def record_search(
    *,
    collection: str,
    mode: str,
    result_count: int,
    strategy_counts: Mapping[str, int] | None = None,
) -> None:
    """Record one ranking pass."""
    SEARCH_REQUESTS.labels(collection=collection, mode=mode).inc()
    SEARCH_RESULTS.labels(collection=collection).observe(result_count)
    for strategy, count in (strategy_counts or {}).items():
        if count:
            FIELD_MATCHES.labels(strategy=strategy).inc(count)


def get_metrics() -> bytes:
    """Return metrics in Prometheus exposition format."""
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Return the Prometheus exposition content type."""
    return CONTENT_TYPE_LATEST
