"""In-memory catalog store.

Holds records in a list and assigns ids like an auto-increment column. Used
as the test double for the hosted backend and for local demos.
"""

import copy
import threading
from pathlib import Path
from typing import Any, Collection, Dict, Iterable, List, Optional

import yaml

from storefront.logging import get_logger
from storefront.persistence.exceptions import RecordNotFoundError
from storefront.search.models import CatalogRecord

from .base import CatalogStore

logger = get_logger(__name__, component="store")

SAMPLE_CATALOG_PATH = Path(__file__).parent / "sample_catalog.yaml"


def load_sample_records(path: Path = SAMPLE_CATALOG_PATH) -> List[Dict[str, Any]]:
    """Load the demo product list from YAML.

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the YAML cannot be parsed
    """
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    return list(data.get("products", []))


class InMemoryCatalogStore(CatalogStore):
    """List-backed CatalogStore. Returned records are copies."""

    name = "memory"

    def __init__(self, records: Optional[Iterable[Dict[str, Any]]] = None):
        self._records: List[Dict[str, Any]] = []
        self._next_id = 1
        self._lock = threading.Lock()
        if records:
            self.insert_records(records)

    @classmethod
    def with_sample_data(cls) -> "InMemoryCatalogStore":
        return cls(load_sample_records())

    def fetch_records(
        self,
        categories: Optional[Collection[str]] = None,
        limit: Optional[int] = None,
    ) -> List[CatalogRecord]:
        with self._lock:
            selected = [
                record
                for record in self._records
                if categories is None or record.get("collection") in categories
            ]
        if limit is not None:
            selected = selected[:limit]
        return [copy.deepcopy(record) for record in selected]

    def get_record(self, record_id: int) -> CatalogRecord:
        with self._lock:
            return copy.deepcopy(self._find(record_id))

    def insert_records(self, records: Iterable[Dict[str, Any]]) -> int:
        count = 0
        with self._lock:
            for record in records:
                stored = dict(record)
                if stored.get("id") is None:
                    stored["id"] = self._next_id
                self._next_id = max(self._next_id, int(stored["id"])) + 1
                self._records.append(stored)
                count += 1

        logger.debug(
            "Inserted records into memory store",
            extra={"event": "store.records.inserted", "count": count},
        )
        return count

    def update_record(self, record_id: int, changes: Dict[str, Any]) -> CatalogRecord:
        with self._lock:
            record = self._find(record_id)
            record.update({key: value for key, value in changes.items() if key != "id"})
            return copy.deepcopy(record)

    def delete_record(self, record_id: int) -> None:
        with self._lock:
            record = self._find(record_id)
            self._records.remove(record)

    def __len__(self) -> int:
        return len(self._records)

    def _find(self, record_id: int) -> Dict[str, Any]:
        for record in self._records:
            if record.get("id") == record_id:
                return record
        raise RecordNotFoundError(f"Product {record_id} not found", record_id=record_id)
