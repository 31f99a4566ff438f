"""Observability module for tracing, metrics, and logging."""

from starred_search.observability.logging import JsonFormatter, configure_logging
from starred_search.observability.metrics import (
    INDEX_DOC_COUNT,
    REBUILD_LATENCY,
    SEARCH_LATENCY,
    SEARCH_RESULTS,
    get_metrics,
    track_latency,
)
from starred_search.observability.tracing import (
    create_span,
    get_trace_context,
    get_tracer,
    init_tracing,
    set_trace_context,
)


__all__ = [
    "INDEX_DOC_COUNT",
    "REBUILD_LATENCY",
    "SEARCH_LATENCY",
    "SEARCH_RESULTS",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_metrics",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "set_trace_context",
    "track_latency",
]
