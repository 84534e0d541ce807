"""Catalog store interface.

Everything that reads or writes product rows goes through CatalogStore:
the SQL store for a local database, the REST store for the hosted backend,
and the in-memory store for tests and demos.
"""

from abc import ABC, abstractmethod
from typing import Any, Collection, Dict, Iterable, List, Optional

from storefront.search.models import CatalogRecord


class CatalogStore(ABC):
    """Source of catalog records.

    ``categories`` arguments are sets of exact stored ``collection`` values,
    usually produced by CategoryAliasResolver.resolve(). ``None`` means no
    category filter; an empty collection matches nothing.
    """

    name = "store"

    @abstractmethod
    def fetch_records(
        self,
        categories: Optional[Collection[str]] = None,
        limit: Optional[int] = None,
    ) -> List[CatalogRecord]:
        """Return records whose collection is in ``categories``, in id order.

        Raises:
            StoreError or PersistenceError: If the backend fails
        """

    @abstractmethod
    def get_record(self, record_id: int) -> CatalogRecord:
        """Return one record.

        Raises:
            RecordNotFoundError: If no record has this id
        """

    @abstractmethod
    def insert_records(self, records: Iterable[Dict[str, Any]]) -> int:
        """Insert records and return how many were stored."""

    @abstractmethod
    def update_record(self, record_id: int, changes: Dict[str, Any]) -> CatalogRecord:
        """Apply a partial update and return the updated record.

        Raises:
            RecordNotFoundError: If no record has this id
        """

    @abstractmethod
    def delete_record(self, record_id: int) -> None:
        """Delete one record.

        Raises:
            RecordNotFoundError: If no record has this id
        """

    def close(self) -> None:
        """Release connections held by the store."""
