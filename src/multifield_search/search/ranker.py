"""Multi-field, multi-term ranking over an in-memory record collection.

Each call is a fresh linear scan: items x terms x fields, with no index and no
state kept between calls. For every term the best weighted field match wins;
term scores are summed, averaged over the query's terms, and scaled by how
many of the terms matched.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from contextlib import nullcontext
from dataclasses import dataclass
import logging
import time
from typing import Any, TypeVar

from multifield_search.config import Settings, get_settings
from multifield_search.observability.context import get_collection
from multifield_search.observability.metrics import record_search, track_latency
from multifield_search.observability.tracing import create_span
from multifield_search.search.analyzers import tokenize
from multifield_search.search.matching import match_field
from multifield_search.search.models import SearchOptions, SearchResult
from multifield_search.search.schema import FieldDescriptor, FieldSchema


logger = logging.getLogger(__name__)

T = TypeVar("T")

# Final score = average term score * (COVERAGE_FLOOR + COVERAGE_BONUS * coverage)
COVERAGE_FLOOR = 0.7
COVERAGE_BONUS = 0.3


@dataclass
class _ItemScore:
    """Scratch accumulator for one item during a ranking pass."""

    total_score: float = 0.0
    matched_terms: int = 0
    matched_fields: tuple[str, ...] = ()

    def final_score(self, term_count: int, *, require_all_terms: bool) -> float | None:
        """Return the item's final score, or None when the item is excluded."""
        if require_all_terms:
            if self.matched_terms != term_count:
                return None
            return self.total_score / term_count

        if self.matched_terms == 0:
            return None
        coverage = self.matched_terms / term_count
        return (self.total_score / term_count) * (COVERAGE_FLOOR + COVERAGE_BONUS * coverage)


def _score_item(
    item: Any,
    terms: Sequence[str],
    fields: Sequence[FieldDescriptor],
    *,
    strict: bool,
    strategy_counts: Counter[str],
) -> _ItemScore:
    # Extract once per item, not once per term
    texts = [(descriptor, descriptor.extract(item, strict=strict)) for descriptor in fields]
    accumulator = _ItemScore()
    matched_fields: dict[str, None] = {}

    for term in terms:
        best_score = 0.0
        best_key: str | None = None
        best_strategy = None

        for descriptor, text in texts:
            match = match_field(text, term)
            if not match.matched:
                continue
            weighted = match.score * descriptor.weight
            if weighted > best_score:
                best_score = weighted
                best_key = descriptor.key
                best_strategy = match.strategy

        if best_key is None:
            continue

        accumulator.total_score += best_score
        accumulator.matched_terms += 1
        matched_fields.setdefault(best_key, None)
        if best_strategy is not None:
            strategy_counts[best_strategy.value] += 1

    accumulator.matched_fields = tuple(matched_fields)
    return accumulator


def _passthrough(items: Sequence[T]) -> list[SearchResult]:
    # No terms to filter on: every item, uncapped
    return [SearchResult(item=item, score=1.0) for item in items]


def rank(
    items: Iterable[T],
    query: str,
    fields: FieldSchema | Iterable[FieldDescriptor],
    options: SearchOptions | None = None,
    *,
    collection: str | None = None,
    settings: Settings | None = None,
) -> list[SearchResult]:
    """Rank ``items`` against ``query`` over the weighted ``fields``.

    An empty query (or one with no searchable characters) passes every item
    through with score 1 and no matched fields, in input order, ignoring
    ``options.max_results``. Otherwise items are scored, filtered by
    ``options.min_score``, sorted by score (stable for ties) and capped at
    ``options.max_results``.

    Args:
        items: Records to rank; never mutated, referenced by the results.
        query: Free-text query.
        fields: Field schema or descriptors to search.
        options: Per-call ranking options (defaults when None).
        collection: Label for metrics and logs (defaults to the context's).
        settings: Settings override (defaults to ``get_settings()``).

    Returns:
        Ranked results, best first.
    """
    settings = settings or get_settings()
    options = options or SearchOptions()
    collection = collection or get_collection()

    item_list = list(items)
    field_list = list(fields)
    terms = tokenize(query)
    mode = "all_terms" if options.require_all_terms else "any_term"

    span = (
        create_span(
            "search.rank",
            attributes={
                "search.collection": collection,
                "search.item_count": len(item_list),
                "search.term_count": len(terms),
                "search.field_count": len(field_list),
            },
        )
        if settings.tracing_enabled
        else nullcontext()
    )
    latency = track_latency(collection) if settings.metrics_enabled else nullcontext()

    started = time.perf_counter()
    strategy_counts: Counter[str] = Counter()
    with span as active_span, latency:
        if not terms:
            mode = "passthrough"
            results = _passthrough(item_list)
        else:
            results = []
            for item in item_list:
                accumulator = _score_item(
                    item,
                    terms,
                    field_list,
                    strict=settings.strict_extractors,
                    strategy_counts=strategy_counts,
                )
                score = accumulator.final_score(len(terms), require_all_terms=options.require_all_terms)
                if score is None or score < options.min_score:
                    continue
                results.append(
                    SearchResult(
                        item=item,
                        score=score,
                        matched_fields=frozenset(accumulator.matched_fields),
                    )
                )

            results.sort(key=lambda result: result.score, reverse=True)
            if options.max_results is not None and len(results) > options.max_results:
                results = results[: options.max_results]

        if active_span is not None:
            active_span.set_attribute("search.result_count", len(results))

    if settings.metrics_enabled:
        record_search(
            collection=collection,
            mode=mode,
            result_count=len(results),
            strategy_counts=strategy_counts,
        )

    logger.debug(
        "Ranked %d items into %d results",
        len(item_list),
        len(results),
        extra={
            "query": query,
            "terms": terms,
            "mode": mode,
            "field_count": len(field_list),
            "elapsed_ms": round((time.perf_counter() - started) * 1000, 3),
        },
    )
    return results


def search_by_keys(items: Iterable[T], query: str, keys: Iterable[str]) -> list[T]:
    """Return the items matching ``query`` on the named keys, best first.

    Every key gets weight 1 and is read straight from the item (mapping key or
    attribute). Default options apply.
    """
    schema = FieldSchema.uniform(dict.fromkeys(str(key) for key in keys))
    return [result.item for result in rank(items, query, schema)]


def matches_query(
    item: Any,
    query: str,
    fields: FieldSchema | Iterable[FieldDescriptor],
    options: SearchOptions | None = None,
    **kwargs: Any,
) -> bool:
    """Return True when ``item`` on its own survives ranking for ``query``.

    Intended for filtering one record at a time, e.g. combined with other
    list filters. An empty query matches everything.
    """
    return bool(rank([item], query, fields, options, **kwargs))
