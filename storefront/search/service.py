"""Store-backed product search.

Category narrowing is pushed down to the store as an exact ``collection``
filter; free-text matching then runs over the narrowed candidates.
"""

import time
from typing import Optional

from storefront.config.models import CatalogConfig
from storefront.logging import get_logger
from storefront.stores.base import CatalogStore

from .aliases import CategoryAliasResolver
from .matcher import CatalogMatcher
from .models import SearchResult

logger = get_logger(__name__, component="search")


class CatalogSearchService:
    """Answers "products in this category matching this text" questions."""

    def __init__(
        self,
        store: CatalogStore,
        resolver: Optional[CategoryAliasResolver] = None,
        matcher: Optional[CatalogMatcher] = None,
        catalog_config: Optional[CatalogConfig] = None,
    ):
        self.store = store
        self.resolver = resolver or CategoryAliasResolver()
        self.matcher = matcher or CatalogMatcher()
        self.catalog_config = catalog_config

    @classmethod
    def from_config(cls, store: CatalogStore, catalog_config) -> "CatalogSearchService":
        """Build a service using the configured categories and alias table."""
        return cls(
            store,
            resolver=CategoryAliasResolver(catalog_config.category_aliases),
            catalog_config=catalog_config,
        )

    def canonical_label(self, category: str) -> str:
        """Map a configured card title to the label its collection is filed under."""
        if self.catalog_config is not None:
            configured = self.catalog_config.get_category(category)
            if configured is not None:
                return configured.label
        return category

    def search(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> SearchResult:
        """Search the catalog.

        Args:
            query: Free text; None or blank matches every candidate
            category: Category card title or canonical label; None or blank
                searches everything
            limit: Cap on the number of candidates fetched from the store

        Raises:
            StoreError or PersistenceError: If the store cannot be read
        """
        started = time.perf_counter()

        category = category.strip() if category and category.strip() else None
        variants = self.resolver.resolve(self.canonical_label(category)) if category else frozenset()

        candidates = self.store.fetch_records(
            categories=variants if category else None,
            limit=limit,
        )
        records = self.matcher.filter(query, candidates)

        logger.info(
            "Search completed",
            extra={
                "event": "search.completed",
                "query": query,
                "category": category,
                "variants": sorted(variants),
                "candidates": len(candidates),
                "matched": len(records),
                "duration_ms": round((time.perf_counter() - started) * 1000, 2),
            },
        )

        return SearchResult(
            query=query,
            category=category,
            category_variants=variants,
            records=records,
            candidates=len(candidates),
        )
