"""Logging, tracing and metrics for ranking passes."""

from multifield_search.observability.bootstrap import setup_observability
from multifield_search.observability.context import (
    get_collection,
    get_trace_context,
    search_scope,
    set_trace_context,
    trace_context,
)
from multifield_search.observability.logging import JsonFormatter, configure_logging
from multifield_search.observability.metrics import (
    FIELD_MATCHES,
    SEARCH_LATENCY,
    SEARCH_REQUESTS,
    SEARCH_RESULTS,
    get_metrics,
    get_metrics_content_type,
    record_search,
    track_latency,
)
from multifield_search.observability.tracing import create_span, get_tracer, init_tracing


__all__ = [
    "FIELD_MATCHES",
    "SEARCH_LATENCY",
    "SEARCH_REQUESTS",
    "SEARCH_RESULTS",
    "JsonFormatter",
    "configure_logging",
    "create_span",
    "get_collection",
    "get_metrics",
    "get_metrics_content_type",
    "get_trace_context",
    "get_tracer",
    "init_tracing",
    "record_search",
    "search_scope",
    "set_trace_context",
    "setup_observability",
    "trace_context",
    "track_latency",
]
