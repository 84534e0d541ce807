"""Local relational persistence for products and contact messages.

Public API:
    - init_database(database_url) / get_session() / close_database() / get_engine()
    - ProductRepository, ContactMessageRepository
    - PersistenceError, DatabaseConnectionError, RecordNotFoundError, DataIntegrityError

Example:
    >>> from storefront.persistence import init_database, get_session, ProductRepository
    >>> init_database("sqlite:///./data/storefront.db")
    >>> with get_session() as session:
    ...     products = ProductRepository(session).list_products(collections={"Batteries"})
"""

from .database import close_database, get_engine, get_session, init_database, is_initialized
from .exceptions import (
    DatabaseConnectionError,
    DataIntegrityError,
    PersistenceError,
    RecordNotFoundError,
)
from .repositories import ContactMessageRepository, ProductRepository

__all__ = [
    "init_database",
    "get_session",
    "close_database",
    "get_engine",
    "is_initialized",
    "ProductRepository",
    "ContactMessageRepository",
    "PersistenceError",
    "DatabaseConnectionError",
    "RecordNotFoundError",
    "DataIntegrityError",
]
