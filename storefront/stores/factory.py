"""Factory for the configured catalog store."""

import logging

from storefront.config.environment import EnvironmentConfig
from storefront.config.models import AppConfig, StoreBackend

from .base import CatalogStore
from .exceptions import StoreConfigurationError
from .memory import InMemoryCatalogStore, load_sample_records
from .rest import RestCatalogStore
from .sql import SqlCatalogStore

logger = logging.getLogger(__name__)


def get_store(app_config: AppConfig, env_config: EnvironmentConfig) -> CatalogStore:
    """Instantiate the store selected by ``store.backend``.

    With ``store.seed_sample_data`` an empty memory or SQL store is filled
    from the bundled sample catalog.

    Raises:
        StoreConfigurationError: If the backend is unknown or cannot be built
    """
    backend = getattr(app_config.store.backend, "value", app_config.store.backend)

    logger.debug("Creating catalog store", extra={"backend": backend})

    try:
        if backend == StoreBackend.MEMORY.value:
            store: CatalogStore = InMemoryCatalogStore()
        elif backend == StoreBackend.SQL.value:
            store = SqlCatalogStore(env_config.database_url)
        elif backend == StoreBackend.REST.value:
            return RestCatalogStore(
                api_url=env_config.catalog_api_url or "",
                api_key=env_config.catalog_api_key or "",
                table=app_config.store.table,
                timeout=app_config.advanced.http_request_timeout,
                user_agent=app_config.advanced.user_agent,
            )
        else:
            supported = ", ".join(member.value for member in StoreBackend)
            raise StoreConfigurationError(
                f"Unknown store backend: {backend}. Supported backends: {supported}"
            )
    except StoreConfigurationError:
        raise
    except Exception as e:
        raise StoreConfigurationError(f"Failed to create {backend} store: {e}") from e

    if app_config.store.seed_sample_data and not store.fetch_records(limit=1):
        count = store.insert_records(load_sample_records())
        logger.info(f"Seeded {count} sample products", extra={"event": "store.seeded", "count": count})

    return store
