"""Catalog pages and admin inventory management."""

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from storefront.config.models import CatalogConfig
from storefront.domain.models import Category, ProductType
from storefront.importer import ImportResult, ProductImporter, coerce_changes
from storefront.logging import get_logger
from storefront.search.models import CatalogRecord, ResultPage
from storefront.search.service import CatalogSearchService
from storefront.stores.base import CatalogStore

from .models import ProductDetail

logger = get_logger(__name__, component="catalog")


class CatalogService:
    """Read-only queries behind the shopper-facing pages."""

    def __init__(self, store: CatalogStore, catalog_config: Optional[CatalogConfig] = None):
        self.store = store
        self.config = catalog_config or CatalogConfig()

    def categories(self) -> List[Category]:
        return list(self.config.categories)

    def best_sellers(self) -> List[CatalogRecord]:
        """The first few products, shown on the home page."""
        return self.store.fetch_records(limit=self.config.best_sellers_limit)

    def products_by_type(self) -> Dict[str, List[CatalogRecord]]:
        """Split the catalog into original and compatible products.

        Records with any other ``type`` appear in neither group.
        """
        groups: Dict[str, List[CatalogRecord]] = {member.value: [] for member in ProductType}
        for record in self.store.fetch_records():
            product_type = record.get("type")
            if product_type in groups:
                groups[product_type].append(record)
        return groups

    def product_detail(self, record_id: int) -> ProductDetail:
        """
        Raises:
            RecordNotFoundError: If the product does not exist
        """
        return ProductDetail.from_record(self.store.get_record(record_id))


class AdminService:
    """Operations behind the admin dashboard."""

    def __init__(
        self,
        store: CatalogStore,
        search_service: Optional[CatalogSearchService] = None,
        importer: Optional[ProductImporter] = None,
        page_size: int = 15,
    ):
        self.store = store
        self.search_service = search_service or CatalogSearchService(store)
        self.importer = importer or ProductImporter(store)
        self.page_size = page_size

    def inventory(self, query: Optional[str] = None) -> ResultPage:
        """Search every product and return the first page of matches."""
        result = self.search_service.search(query=query)
        return result.page(self.page_size)

    def update_product(self, record_id: int, changes: Mapping[str, Any]) -> CatalogRecord:
        """Apply edited fields, coerced like imported cells.

        Raises:
            ValueError: If a field name is not a product column
            RecordNotFoundError: If the product does not exist
        """
        coerced = coerce_changes(changes)
        record = self.store.update_record(record_id, coerced)
        logger.info(
            f"Product {record_id} updated",
            extra={"event": "admin.product.updated", "product_id": record_id, "fields": sorted(coerced)},
        )
        return record

    def delete_product(self, record_id: int) -> None:
        """
        Raises:
            RecordNotFoundError: If the product does not exist
        """
        self.store.delete_record(record_id)
        logger.info(
            f"Product {record_id} deleted",
            extra={"event": "admin.product.deleted", "product_id": record_id},
        )

    def import_rows(self, rows: Iterable[Mapping[str, Any]]) -> ImportResult:
        return self.importer.import_rows(rows)

    def import_file(self, path: Path) -> ImportResult:
        return self.importer.import_file(path)
