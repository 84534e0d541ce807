"""Free-text matching of catalog records.

A record matches a query when every whitespace-separated query term, once
normalized, is a substring of the record's normalized searchable text. Terms
may appear in any order and in any searchable field. A query without usable
terms matches every record.
"""

import logging
import re
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from storefront.logging import get_logger

from .models import CatalogRecord, MatchResult
from .normalizer import normalize

logger = get_logger(__name__, component="search")

SEARCHABLE_FIELDS = ("name", "brand", "sku", "description")

# productOptionDescription1..6 as imported, optionDescription_N from older exports
OPTION_DESCRIPTION_FIELD = re.compile(r"^(?:productOptionDescription|optionDescription_?)(\d+)$")


def option_description_fields(record: Mapping[str, Any]) -> List[str]:
    """Return the record's option-description keys ordered by their number."""
    numbered = []
    for key in record:
        if not isinstance(key, str):
            continue
        match = OPTION_DESCRIPTION_FIELD.match(key)
        if match:
            numbered.append((int(match.group(1)), key))
    return [key for _, key in sorted(numbered)]


def searchable_text(record: Any) -> str:
    """Concatenate a record's searchable fields with single spaces.

    Order: name, brand, sku, description, then option descriptions. Missing
    or None fields contribute an empty string. Anything that is not a mapping
    has no searchable text.
    """
    if not isinstance(record, Mapping):
        return ""

    keys = list(SEARCHABLE_FIELDS) + option_description_fields(record)
    parts = []
    for key in keys:
        value = record.get(key)
        parts.append("" if value is None else str(value))
    return " ".join(parts)


def query_terms(query: Optional[str]) -> Tuple[str, ...]:
    """Split a raw query into normalized, non-empty terms.

    The query is lowercased and split on runs of whitespace before each term
    is normalized, so a term made only of separators ("-", "/") is dropped.
    """
    if query is None:
        return ()
    raw = query if isinstance(query, str) else str(query)
    terms = (normalize(term) for term in raw.lower().split())
    return tuple(term for term in terms if term)


class CatalogMatcher:
    """Evaluates catalog records against free-text queries."""

    def __init__(self, logger_instance: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None):
        self.logger = logger_instance or logger

    def evaluate(self, query: Optional[str], record: Any) -> MatchResult:
        """Test one record and report which terms were missing."""
        terms = query_terms(query)
        if not terms:
            return MatchResult(is_match=True)

        blob = normalize(searchable_text(record))
        missing = tuple(term for term in terms if term not in blob)

        return MatchResult(is_match=not missing, terms=terms, missing_terms=missing)

    def matches(self, query: Optional[str], record: Any) -> bool:
        """True iff every query term appears in the record's searchable text."""
        return self.evaluate(query, record).is_match

    def filter(self, query: Optional[str], records: Iterable[CatalogRecord]) -> List[CatalogRecord]:
        """Return the records that match ``query``, preserving their order."""
        terms = query_terms(query)
        candidates = list(records)

        if not terms:
            return candidates

        matched = []
        for record in candidates:
            blob = normalize(searchable_text(record))
            if all(term in blob for term in terms):
                matched.append(record)

        self.logger.debug(
            "Filtered records by query",
            extra={
                "event": "search.filter.completed",
                "terms": list(terms),
                "candidates": len(candidates),
                "matched": len(matched),
            },
        )
        return matched


_default_matcher = CatalogMatcher()


def matches(query: Optional[str], record: Any) -> bool:
    """Module-level shortcut for CatalogMatcher().matches()."""
    return _default_matcher.matches(query, record)
