"""Unit tests for the single-field match strategy chain."""

import pytest

from multifield_search.search.matching import (
    STRATEGIES,
    FieldMatch,
    MatchStrategy,
    acronym_score,
    contains_score,
    exact_score,
    fuzzy_score,
    match_field,
    prefix_score,
)


@pytest.mark.unit
class TestStrategyChain:
    """The chain is ordered by priority and each strategy stands alone."""

    def test_priority_order(self):
        assert [strategy for strategy, _ in STRATEGIES] == [
            MatchStrategy.EXACT,
            MatchStrategy.CONTAINS,
            MatchStrategy.PREFIX,
            MatchStrategy.FUZZY,
            MatchStrategy.ACRONYM,
        ]

    def test_exact_score(self):
        assert exact_score("deck", "deck") == 1.0
        assert exact_score("deck", "decks") is None

    def test_contains_score_rises_with_coverage(self):
        short = contains_score("elite construction co", "co")
        longer = contains_score("elite construction co", "construction")
        assert short is not None and longer is not None
        assert 0.8 < short < longer < 1.0

    def test_prefix_score_in_isolation(self):
        assert prefix_score("construction", "cons") == 0.7
        assert prefix_score("construction", "struct") is None

    def test_fuzzy_score_threshold(self):
        assert fuzzy_score("plumbing", "plumbng") == pytest.approx(0.875 * 0.6)
        assert fuzzy_score("plumbing", "roofing") is None

    def test_acronym_requires_two_characters(self):
        assert acronym_score("john smith", "j") is None

    def test_acronym_may_skip_words(self):
        assert acronym_score("john a doe", "jd") == 0.5

    def test_acronym_never_revisits_words(self):
        assert acronym_score("john smith", "sj") is None

    def test_acronym_on_empty_field(self):
        assert acronym_score("", "js") is None


@pytest.mark.unit
class TestMatchField:
    """match_field normalizes inputs and returns the first strategy that fires."""

    def test_exact_match_ignores_case_and_punctuation(self):
        result = match_field("Acme, Inc.", "acme inc")
        assert result == FieldMatch(matched=True, score=1.0, strategy=MatchStrategy.EXACT)

    def test_contains_match(self):
        result = match_field("Elite Construction Co.", "Elite")
        assert result.matched
        assert result.strategy is MatchStrategy.CONTAINS
        assert result.score == pytest.approx(0.8 + 0.2 * (5 / 21))

    def test_prefix_is_shadowed_by_contains(self):
        # Every prefix is also a substring, so the 0.7 prefix tier never fires
        result = match_field("Construction", "cons")
        assert result.strategy is MatchStrategy.CONTAINS
        assert result.score == pytest.approx(0.8 + 0.2 * (4 / 12))
        assert result.score > prefix_score("construction", "cons")

    def test_fuzzy_match_for_typo(self):
        result = match_field("John Smith", "jon smith")
        assert result.matched
        assert result.strategy is MatchStrategy.FUZZY
        assert result.score == pytest.approx(0.9 * 0.6)
        assert result.score <= 0.6

    def test_acronym_match(self):
        result = match_field("John Smith", "js")
        assert result == FieldMatch(matched=True, score=0.5, strategy=MatchStrategy.ACRONYM)

    def test_no_match(self):
        result = match_field("John Smith", "plumbing")
        assert result == FieldMatch.none()
        assert result.matched is False
        assert result.score == 0.0
        assert result.strategy is None

    def test_empty_field_matches_nothing(self):
        assert match_field("", "deck").matched is False

    def test_fuzzy_never_outranks_contains(self):
        contains = match_field("Kitchen Remodel Project", "kitchen")
        fuzzy = match_field("Kitchen", "kitchn")
        assert fuzzy.strategy is MatchStrategy.FUZZY
        assert fuzzy.score < contains.score
