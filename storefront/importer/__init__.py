"""Product spreadsheet import."""

from .coercion import COLUMN_TYPES, coerce_changes, map_row, parse_value
from .models import ImportResult
from .service import ProductImporter, read_csv_rows

__all__ = [
    "COLUMN_TYPES",
    "parse_value",
    "map_row",
    "coerce_changes",
    "ImportResult",
    "ProductImporter",
    "read_csv_rows",
]
