"""Data structures returned by the matcher and the search service."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

CatalogRecord = Dict[str, Any]


@dataclass(frozen=True)
class MatchResult:
    """Outcome of testing one record against one query.

    Attributes:
        is_match: True if every required term was found (or there were none)
        terms: Normalized, non-empty query terms that were required
        missing_terms: Terms that were not found in the record's blob
    """

    is_match: bool
    terms: Tuple[str, ...] = ()
    missing_terms: Tuple[str, ...] = ()

    @property
    def is_match_all(self) -> bool:
        """True when the query had no usable terms and so matched everything."""
        return not self.terms


@dataclass
class ResultPage:
    """A display slice of a search result."""

    records: List[CatalogRecord]
    total: int

    @property
    def shown(self) -> int:
        return len(self.records)

    @property
    def is_truncated(self) -> bool:
        return self.total > self.shown

    @property
    def summary(self) -> str:
        """Footer text for result tables, e.g. "Showing 15 of 42 products"."""
        if self.total == 0:
            return "No products match your search query."
        if self.is_truncated:
            return f"Showing {self.shown} of {self.total} products"
        return f"Showing {self.total} product{'s' if self.total != 1 else ''}"


@dataclass
class SearchResult:
    """Records that passed category narrowing and text matching.

    Attributes:
        query: Raw query as typed by the user (None if not searching)
        category: Canonical category label requested (None for all categories)
        category_variants: Stored collection values accepted for the category
        records: Matching records in store order
        candidates: Number of records fetched before text matching
    """

    query: Optional[str]
    category: Optional[str]
    category_variants: FrozenSet[str] = field(default_factory=frozenset)
    records: List[CatalogRecord] = field(default_factory=list)
    candidates: int = 0

    @property
    def total(self) -> int:
        return len(self.records)

    def page(self, size: int) -> ResultPage:
        """Return the first ``size`` records together with the overall total."""
        if size <= 0:
            return ResultPage(records=list(self.records), total=self.total)
        return ResultPage(records=self.records[:size], total=self.total)
