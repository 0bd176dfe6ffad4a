"""Structured JSON logging with trace correlation and query redaction.

Search queries often carry customer names and amounts, so the ``query`` and
``terms`` extras are redacted unless query logging is switched on.
"""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
import logging
import sys
from typing import Any

import orjson

from multifield_search.observability.context import get_trace_context


REDACTED = "[REDACTED]"

_RESERVED_ATTRS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__.keys() | {"message", "asctime"}
)


def _clip(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[:limit] + "..."


class JsonFormatter(logging.Formatter):
    """One orjson line per record, carrying trace ids and ``extra`` fields."""

    SECRET_KEYS = frozenset({"password", "token", "api_key", "secret", "authorization"})
    QUERY_KEYS = frozenset({"query", "terms"})
    MAX_MESSAGE_LEN = 2000
    MAX_EXTRA_LEN = 500

    def __init__(self, *args: Any, log_queries: bool = False, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.log_queries = log_queries
        self._hidden = self.SECRET_KEYS if log_queries else self.SECRET_KEYS | self.QUERY_KEYS

    def format(self, record: logging.LogRecord) -> str:
        entry = self._base_entry(record)
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS or key.startswith("_"):
                continue
            if key.lower() in self._hidden:
                entry[key] = REDACTED
            elif isinstance(value, str):
                entry[key] = _clip(value, self.MAX_EXTRA_LEN)
            else:
                entry[key] = value
        return orjson.dumps(entry, default=self._json_default).decode("utf-8")

    def _base_entry(self, record: logging.LogRecord) -> dict[str, Any]:
        ctx = get_trace_context()
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "component": record.name.rpartition(".")[2],
            "message": _clip(record.getMessage(), self.MAX_MESSAGE_LEN),
            "trace_id": ctx.get("trace_id", ""),
            "span_id": ctx.get("span_id", ""),
        }
        if collection := ctx.get("collection"):
            entry["collection"] = collection
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return entry

    @staticmethod
    def _json_default(value: Any) -> Any:
        if isinstance(value, Enum):
            return value.value
        if isinstance(value, (set, frozenset)):
            try:
                return sorted(value)
            except TypeError:
                return list(value)
        if isinstance(value, (bytes, bytearray)):
            return value.decode("utf-8", errors="replace")
        if isinstance(value, Exception):
            return f"{type(value).__name__}: {value}"
        return repr(value)


def configure_logging(
    level: str = "INFO",
    json_output: bool = True,
    *,
    log_queries: bool = False,
    logger_levels: dict[str, str] | None = None,
) -> None:
    """Install a single stdout handler on the root logger.

    Args:
        level: Root log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_output: Emit structured JSON logs when True
        log_queries: Keep raw query text in JSON records instead of redacting it
        logger_levels: Per-logger level overrides (logger name -> level string)
    """
    handler = logging.StreamHandler(sys.stdout)
    if json_output:
        handler.setFormatter(JsonFormatter(log_queries=log_queries))
    else:
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s [%(name)s] %(message)s"))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for logger_name, logger_level in (logger_levels or {}).items():
        logging.getLogger(logger_name).setLevel(getattr(logging, logger_level.upper(), logging.INFO))
