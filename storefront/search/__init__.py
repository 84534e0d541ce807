"""Product search: text normalization, category aliases and record matching.

This package provides:
- normalize: canonical form used on both sides of every comparison
- CategoryAliasResolver / resolve_aliases: canonical label -> stored variants
- CatalogMatcher / matches: all-terms-must-appear record matching
- SearchResult / ResultPage / MatchResult: result containers

The store-backed CatalogSearchService lives in storefront.search.service.
"""

from .aliases import DEFAULT_CATEGORY_ALIASES, CategoryAliasResolver, resolve_aliases
from .matcher import CatalogMatcher, matches, query_terms, searchable_text
from .models import CatalogRecord, MatchResult, ResultPage, SearchResult
from .normalizer import normalize

__all__ = [
    "normalize",
    "CategoryAliasResolver",
    "DEFAULT_CATEGORY_ALIASES",
    "resolve_aliases",
    "CatalogMatcher",
    "matches",
    "query_terms",
    "searchable_text",
    "CatalogRecord",
    "MatchResult",
    "ResultPage",
    "SearchResult",
]
