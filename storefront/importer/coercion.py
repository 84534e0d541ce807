"""Spreadsheet cell coercion.

Import spreadsheets are typed loosely: numbers arrive as text, stock levels
as "In Stock", flags as "TRUE"/"yes"/1. parse_value() turns one cell into
the value stored for its column type.
"""

import math
import re
from typing import Any, Dict, Mapping, Optional

from storefront.domain.models import IN_STOCK_SENTINEL, PRODUCT_COLUMNS

COLUMN_TYPES = ("text", "numeric", "integer", "boolean", "inventory")

IN_STOCK_WORDS = ("instock", "in stock")
TRUE_WORDS = ("true", "1", "yes")

# Longest numeric prefix, the way spreadsheet exports are read leniently
LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")
LEADING_FLOAT = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _to_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_leading_int(value: Any) -> Optional[int]:
    """Parse the integer prefix of ``value`` ("12 units" -> 12), or None."""
    match = LEADING_INTEGER.match(_to_text(value))
    return int(match.group(1)) if match else None


def parse_leading_float(value: Any) -> Optional[float]:
    """Parse the decimal prefix of ``value`` ("19.99 INR" -> 19.99), or None."""
    match = LEADING_FLOAT.match(_to_text(value))
    return float(match.group(1)) if match else None


def parse_value(value: Any, target_type: str) -> Any:
    """Coerce one spreadsheet cell to ``target_type``.

    Empty cells (None or "") become None whatever the type. Unknown types
    are treated as text.
    """
    if value is None or value == "":
        return None

    if target_type == "inventory":
        if _to_text(value).lower().strip() in IN_STOCK_WORDS:
            return IN_STOCK_SENTINEL
        return parse_leading_int(value) or 0

    if target_type == "numeric":
        return parse_leading_float(value)

    if target_type == "boolean":
        return _to_text(value).lower().strip() in TRUE_WORDS

    if target_type == "integer":
        return parse_leading_int(value)

    return _to_text(value)


def map_row(row: Mapping[str, Any]) -> Dict[str, Any]:
    """Coerce a spreadsheet row into a catalog record.

    Every known column is present in the result (None when missing from the
    row); columns the catalog does not know are dropped.
    """
    return {
        column: parse_value(row.get(column), column_type)
        for column, column_type in PRODUCT_COLUMNS.items()
    }


def coerce_changes(changes: Mapping[str, Any]) -> Dict[str, Any]:
    """Coerce a partial update with the same rules as an import.

    Raises:
        ValueError: If a field is not a known product column
    """
    unknown = sorted(key for key in changes if key not in PRODUCT_COLUMNS)
    if unknown:
        raise ValueError(f"Unknown product field(s): {', '.join(unknown)}")
    return {key: parse_value(value, PRODUCT_COLUMNS[key]) for key, value in changes.items()}
