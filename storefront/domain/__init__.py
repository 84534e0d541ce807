"""Domain models for the storefront."""

from .models import (
    IN_STOCK_SENTINEL,
    PRODUCT_COLUMNS,
    Category,
    ContactMessage,
    ProductType,
)

__all__ = ["Category", "ContactMessage", "ProductType", "PRODUCT_COLUMNS", "IN_STOCK_SENTINEL"]
