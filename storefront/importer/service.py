"""Bulk product import from spreadsheet rows.

Rows are coerced with map_row() and inserted through the catalog store in a
single call, so a rejected batch leaves the catalog unchanged. Imports only
add products; existing rows are never replaced.
"""

import csv
import time
import uuid
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from storefront.logging import get_logger
from storefront.logging.context import log_context
from storefront.persistence.exceptions import PersistenceError
from storefront.stores.base import CatalogStore
from storefront.stores.exceptions import StoreError

from .coercion import map_row
from .models import ImportResult

logger = get_logger(__name__, component="importer")


def read_csv_rows(path: Path) -> List[dict]:
    """Read a CSV file whose first line holds the column names.

    A UTF-8 byte order mark, as written by spreadsheet exports, is ignored.

    Raises:
        FileNotFoundError: If the file does not exist
    """
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        return list(csv.DictReader(f))


def _is_blank(row: Mapping[str, Any]) -> bool:
    return all(value is None or str(value).strip() == "" for value in row.values())


class ProductImporter:
    """Coerces spreadsheet rows and inserts them into a CatalogStore."""

    def __init__(self, store: CatalogStore):
        self.store = store

    def import_rows(self, rows: Iterable[Mapping[str, Any]], source: Optional[str] = None) -> ImportResult:
        """Insert every non-blank row as a new product.

        Store failures are captured in the result rather than raised so the
        caller can show them next to the row counts.
        """
        started = time.perf_counter()
        result = ImportResult(source=source)
        records = []

        with log_context(import_id=str(uuid.uuid4()), source=source):
            for row_number, row in enumerate(rows, start=1):
                result.total_rows += 1
                if _is_blank(row):
                    result.skipped_rows.append(row_number)
                    continue
                records.append(map_row(row))

            logger.info(
                f"Attempting to upload {len(records)} records",
                extra={
                    "event": "import.started",
                    "rows": result.total_rows,
                    "records": len(records),
                    "store": self.store.name,
                },
            )

            try:
                result.inserted = self.store.insert_records(records) if records else 0
            except (StoreError, PersistenceError) as e:
                result.error_message = str(e)
                logger.error(
                    f"Error inserting data: {e}",
                    extra={"event": "import.failed", "error_type": type(e).__name__},
                )

            result.duration_seconds = time.perf_counter() - started

            if result.succeeded:
                logger.info(
                    "Import completed",
                    extra={
                        "event": "import.completed",
                        "inserted": result.inserted,
                        "skipped": len(result.skipped_rows),
                        "duration_seconds": round(result.duration_seconds, 3),
                    },
                )

        return result

    def import_file(self, path: Path) -> ImportResult:
        """Import a CSV export of the product spreadsheet.

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file is not a .csv file
        """
        path = Path(path)
        if path.suffix.lower() != ".csv":
            raise ValueError(
                f"Unsupported import file type '{path.suffix}'. Export the sheet as CSV first."
            )
        return self.import_rows(read_csv_rows(path), source=path.name)
