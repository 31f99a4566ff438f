"""Prometheus metrics for index rebuilds and searches."""

from __future__ import annotations

from contextlib import contextmanager
import time
from typing import TYPE_CHECKING

from prometheus_client import REGISTRY, CollectorRegistry, Gauge, Histogram, generate_latest


if TYPE_CHECKING:
    from collections.abc import Generator


INDEX_DOC_COUNT = Gauge(
    "starred_search_index_document_count",
    "Repositories in the active search index",
)

REBUILD_LATENCY = Histogram(
    "starred_search_rebuild_latency_seconds",
    "Time to ingest and consolidate a full repository set",
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
)

SEARCH_LATENCY = Histogram(
    "starred_search_search_latency_seconds",
    "Search query latency",
    buckets=(0.0005, 0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25),
)

SEARCH_RESULTS = Histogram(
    "starred_search_search_results",
    "Number of results returned per search",
    buckets=(0, 1, 5, 10, 25, 50, 100),
)


@contextmanager
def track_latency(histogram: Histogram) -> Generator[None, None, None]:
    """Context manager to track operation latency in seconds."""
    start = time.perf_counter()
    try:
        yield
    finally:
        histogram.observe(time.perf_counter() - start)


def get_metrics(registry: CollectorRegistry = REGISTRY) -> bytes:
    """Generate Prometheus exposition output."""
    return generate_latest(registry)
