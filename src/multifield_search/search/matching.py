"""Single-field matching against one search term.

A field matches a term under the first strategy in ``STRATEGIES`` that
accepts the pair. Strategies are tried in a fixed priority order:

- EXACT: normalized texts are equal (1.0)
- CONTAINS: the term is a substring of the field (0.8 to 1.0 by coverage)
- PREFIX: the field starts with the term (0.7)
- FUZZY: edit-distance similarity of at least 0.7 (similarity * 0.6)
- ACRONYM: the term spells the initials of successive words (0.5)

PREFIX can never fire through ``match_field``: any prefix is also a
substring, so CONTAINS always wins first and scores it 0.8 or more. The
strategy stays in the chain so scores match the established ranking exactly.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from multifield_search.search.analyzers import normalize
from multifield_search.search.fuzzy import similarity


FUZZY_THRESHOLD = 0.7
# Fuzzy scores are scaled down so typos never outrank substring hits
FUZZY_CEILING = 0.6
CONTAINS_BASE = 0.8
CONTAINS_COVERAGE_BONUS = 0.2
PREFIX_SCORE = 0.7
ACRONYM_SCORE = 0.5
ACRONYM_MIN_LENGTH = 2


class MatchStrategy(str, Enum):
    """Strategies a field can match a term under, in priority order."""

    EXACT = "exact"
    CONTAINS = "contains"
    PREFIX = "prefix"
    FUZZY = "fuzzy"
    ACRONYM = "acronym"


@dataclass(frozen=True)
class FieldMatch:
    """Outcome of matching one field's text against one term."""

    matched: bool
    score: float
    strategy: MatchStrategy | None = None

    @classmethod
    def none(cls) -> FieldMatch:
        return cls(matched=False, score=0.0)


StrategyFn = Callable[[str, str], float | None]


def exact_score(field_text: str, term: str) -> float | None:
    """Score for identical normalized texts."""
    if field_text == term:
        return 1.0
    return None


def contains_score(field_text: str, term: str) -> float | None:
    """Score for a term found inside the field, rising with term coverage."""
    if term in field_text:
        ratio = len(term) / len(field_text)
        return CONTAINS_BASE + ratio * CONTAINS_COVERAGE_BONUS
    return None


def prefix_score(field_text: str, term: str) -> float | None:
    if field_text.startswith(term):
        return PREFIX_SCORE
    return None


def fuzzy_score(field_text: str, term: str) -> float | None:
    ratio = similarity(field_text, term)
    if ratio >= FUZZY_THRESHOLD:
        return ratio * FUZZY_CEILING
    return None


def acronym_score(field_text: str, term: str) -> float | None:
    """Score for a term that spells initials of the field's words in order.

    ``"js"`` matches ``"john smith"``; words may be skipped
    (``"jd"`` matches ``"john a doe"``) but never revisited.
    """
    if len(term) < ACRONYM_MIN_LENGTH:
        return None

    words = field_text.split(" ")
    word_index = 0
    for char in term:
        for i in range(word_index, len(words)):
            if words[i][:1] == char:
                word_index = i + 1
                break
        else:
            return None
    return ACRONYM_SCORE


STRATEGIES: tuple[tuple[MatchStrategy, StrategyFn], ...] = (
    (MatchStrategy.EXACT, exact_score),
    (MatchStrategy.CONTAINS, contains_score),
    (MatchStrategy.PREFIX, prefix_score),
    (MatchStrategy.FUZZY, fuzzy_score),
    (MatchStrategy.ACRONYM, acronym_score),
)


def match_field(field_text: str, term: str) -> FieldMatch:
    """Match raw field text against a raw term under the strategy chain."""

    normalized_field = normalize(field_text)
    normalized_term = normalize(term)

    for strategy, scorer in STRATEGIES:
        score = scorer(normalized_field, normalized_term)
        if score is not None:
            return FieldMatch(matched=True, score=score, strategy=strategy)

    return FieldMatch.none()
