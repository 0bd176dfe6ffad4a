"""Multi-field fuzzy search and ranking for in-memory record collections."""

from multifield_search.search.analyzers import normalize, tokenize
from multifield_search.search.fuzzy import levenshtein_distance, similarity
from multifield_search.search.matching import FieldMatch, MatchStrategy, match_field
from multifield_search.search.models import SearchOptions, SearchResult
from multifield_search.search.ranker import matches_query, rank, search_by_keys
from multifield_search.search.schema import FieldDescriptor, FieldSchema


__version__ = "0.1.0"

__all__ = [
    "FieldDescriptor",
    "FieldMatch",
    "FieldSchema",
    "MatchStrategy",
    "SearchOptions",
    "SearchResult",
    "levenshtein_distance",
    "match_field",
    "matches_query",
    "normalize",
    "rank",
    "search_by_keys",
    "similarity",
    "tokenize",
]
