"""One-call observability setup for host applications."""

from __future__ import annotations

from multifield_search.config import Settings, get_settings
from multifield_search.observability.logging import configure_logging
from multifield_search.observability.tracing import init_tracing


def setup_observability(settings: Settings | None = None) -> None:
    """Configure logging and, when enabled, tracing from settings.

    Libraries embedding the engine in a host that already configures logging
    and tracing should not call this.
    """
    settings = settings or get_settings()
    configure_logging(
        settings.log_level.upper(),
        json_output=settings.log_json,
        log_queries=settings.log_queries,
    )
    if settings.tracing_enabled:
        init_tracing(service_name=settings.service_name)
