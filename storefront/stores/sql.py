"""CatalogStore backed by the local SQL database."""

from typing import Any, Collection, Dict, Iterable, List, Optional

from storefront.logging import get_logger
from storefront.persistence import (
    ProductRepository,
    RecordNotFoundError,
    get_session,
    init_database,
    is_initialized,
)
from storefront.search.models import CatalogRecord

from .base import CatalogStore
from .exceptions import StoreConfigurationError

logger = get_logger(__name__, component="store")


class SqlCatalogStore(CatalogStore):
    """Reads and writes products through ProductRepository.

    Each call runs in its own session so a failed write never leaves a
    half-applied change behind.
    """

    name = "sql"

    def __init__(self, database_url: Optional[str] = None):
        if database_url:
            init_database(database_url)
        elif not is_initialized():
            raise StoreConfigurationError(
                "Database not initialized. Pass a URL or call init_database() first."
            )

    def fetch_records(
        self,
        categories: Optional[Collection[str]] = None,
        limit: Optional[int] = None,
    ) -> List[CatalogRecord]:
        if categories is not None and not categories:
            return []
        with get_session() as session:
            return ProductRepository(session).list_products(collections=categories, limit=limit)

    def get_record(self, record_id: int) -> CatalogRecord:
        with get_session() as session:
            record = ProductRepository(session).get_by_id(record_id)
        if record is None:
            raise RecordNotFoundError(f"Product {record_id} not found", record_id=record_id)
        return record

    def insert_records(self, records: Iterable[Dict[str, Any]]) -> int:
        with get_session() as session:
            count = ProductRepository(session).insert_many(records)
        logger.info(
            "Inserted products",
            extra={"event": "store.records.inserted", "count": count, "store": self.name},
        )
        return count

    def update_record(self, record_id: int, changes: Dict[str, Any]) -> CatalogRecord:
        with get_session() as session:
            return ProductRepository(session).update(record_id, changes)

    def delete_record(self, record_id: int) -> None:
        with get_session() as session:
            ProductRepository(session).delete(record_id)

    def count(self) -> int:
        with get_session() as session:
            return ProductRepository(session).count()
