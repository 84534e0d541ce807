"""Shopper-facing catalog queries and admin inventory management."""

from .models import InfoSection, ProductDetail, ProductOption, inventory_status
from .service import AdminService, CatalogService

__all__ = [
    "CatalogService",
    "AdminService",
    "ProductDetail",
    "ProductOption",
    "InfoSection",
    "inventory_status",
]
