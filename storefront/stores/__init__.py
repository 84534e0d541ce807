"""Catalog stores: where product records live.

Public API:
    - CatalogStore: Interface every backend implements
    - InMemoryCatalogStore, SqlCatalogStore, RestCatalogStore
    - get_store(app_config, env_config): Build the configured backend
    - StoreError and subclasses
"""

from .base import CatalogStore
from .exceptions import (
    StoreConfigurationError,
    StoreError,
    StoreHTTPError,
    StoreResponseError,
    StoreTimeoutError,
)
from .factory import get_store
from .memory import InMemoryCatalogStore, load_sample_records
from .rest import RestCatalogStore
from .sql import SqlCatalogStore

__all__ = [
    "CatalogStore",
    "InMemoryCatalogStore",
    "SqlCatalogStore",
    "RestCatalogStore",
    "get_store",
    "load_sample_records",
    "StoreError",
    "StoreHTTPError",
    "StoreTimeoutError",
    "StoreResponseError",
    "StoreConfigurationError",
]
