"""Per-call search context: trace ids and the collection label.

Log records read their trace and span ids from here, and ``rank`` reads the
collection label when it is called without an explicit ``collection``.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from typing import TYPE_CHECKING
from uuid import uuid4


if TYPE_CHECKING:
    from opentelemetry.trace import Span

DEFAULT_COLLECTION = "default"

trace_context: ContextVar[dict | None] = ContextVar("trace_context", default=None)


def new_trace_ids() -> tuple[str, str]:
    """Return a fresh ``(trace_id, span_id)`` pair of 32 and 16 hex chars."""
    return uuid4().hex, uuid4().hex[:16]


def _merge(**values: object) -> dict:
    ctx = {**(trace_context.get() or {}), **values}
    trace_context.set(ctx)
    return ctx


def get_trace_context() -> dict:
    """Return the current context, starting a new trace if there is none."""
    ctx = trace_context.get()
    if ctx and ctx.get("trace_id"):
        return ctx
    trace_id, span_id = new_trace_ids()
    return _merge(trace_id=trace_id, span_id=span_id)


def set_trace_context(trace_id: str, span_id: str, **extra: object) -> None:
    """Replace the current context, e.g. ``collection="projects"``."""
    trace_context.set({"trace_id": trace_id, "span_id": span_id, **extra})


def update_span_id(span_id: str) -> None:
    """Point the context at a new span, keeping the trace id and extras."""
    _merge(span_id=span_id)


def bind_span(span: Span) -> Token[dict | None] | None:
    """Copy an OpenTelemetry span's ids into the context so logs correlate.

    Returns the token restoring the previous context, or None for a
    non-recording span.
    """
    ctx = span.get_span_context()
    if not ctx.is_valid:
        return None
    return trace_context.set(
        {
            **(trace_context.get() or {}),
            "trace_id": format(ctx.trace_id, "032x"),
            "span_id": format(ctx.span_id, "016x"),
        }
    )


def get_collection() -> str:
    ctx = trace_context.get() or {}
    return str(ctx.get("collection") or DEFAULT_COLLECTION)


@contextmanager
def search_scope(collection: str, *, trace_id: str | None = None) -> Iterator[dict]:
    """Label every search inside the block with ``collection``.

    A new trace is started unless ``trace_id`` continues an existing one. The
    previous context is restored on exit.

    Example:
        with search_scope("estimates"):
            rank(estimates, query, estimate_schema())
    """
    new_trace_id, span_id = new_trace_ids()
    token = trace_context.set({"trace_id": trace_id or new_trace_id, "span_id": span_id, "collection": collection})
    try:
        yield trace_context.get()  # type: ignore[misc]
    finally:
        trace_context.reset(token)
