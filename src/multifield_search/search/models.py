"""Search value objects.

Both models are immutable: options are read-only per call, and results are
created fresh by each ranking pass and never cached.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field


if TYPE_CHECKING:
    from multifield_search.config import Settings


DEFAULT_MIN_SCORE = 0.3


class SearchOptions(BaseModel):
    """Per-call ranking configuration."""

    model_config = ConfigDict(frozen=True)

    min_score: float = Field(default=DEFAULT_MIN_SCORE, description="Minimum final score kept in results")
    max_results: int | None = Field(default=None, ge=1, description="Cap on the number of results returned")
    require_all_terms: bool = Field(default=False, description="Drop items that miss any query term")

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchOptions:
        """Build options from configured defaults."""
        return cls(
            min_score=settings.default_min_score,
            max_results=settings.default_max_results,
            require_all_terms=settings.default_require_all_terms,
        )


class SearchResult(BaseModel):
    """A ranked record with the fields that produced its score.

    ``item`` is the caller's original object, referenced and never copied.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    item: Any
    score: float = Field(ge=0.0)
    matched_fields: frozenset[str] = Field(default_factory=frozenset)
