"""Shared pytest fixtures."""

import logging

import pytest

from storefront.logging.context import clear_log_context
from storefront.persistence import close_database, init_database
from storefront.stores import InMemoryCatalogStore

STOREFRONT_ENV_VARS = (
    "DATABASE_URL",
    "CATALOG_API_URL",
    "CATALOG_API_KEY",
    "LOG_LEVEL",
    "SMTP_HOST",
    "SMTP_PORT",
    "SMTP_USER",
    "SMTP_PASS",
    "SMTP_SENDER_NAME",
    "CONTACT_TO_EMAIL",
    "ENVIRONMENT",
)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Start every test without storefront settings leaking in from the shell or a .env file."""
    for name in STOREFRONT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    yield
    clear_log_context()


@pytest.fixture
def mock_env_vars(monkeypatch, tmp_path):
    """A complete environment: local database, hosted catalog and SMTP."""
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{tmp_path / 'env.db'}")
    monkeypatch.setenv("CATALOG_API_URL", "https://catalog.example.com")
    monkeypatch.setenv("CATALOG_API_KEY", "anon-key")
    monkeypatch.setenv("SMTP_HOST", "smtp.example.com")
    monkeypatch.setenv("SMTP_PORT", "587")
    monkeypatch.setenv("SMTP_USER", "shop@example.com")
    monkeypatch.setenv("SMTP_PASS", "secret")
    monkeypatch.setenv("CONTACT_TO_EMAIL", "owner@example.com")


@pytest.fixture
def sample_records():
    """A small catalog with the collection spellings seen in real imports."""
    return [
        {
            "id": 1,
            "name": "HP 510 4-Cell Battery",
            "brand": "HP",
            "sku": "HP510-4C",
            "description": "Compatible battery for HP 510.",
            "collection": "Laptop Battery",
            "type": "compatible",
            "price": 950.0,
            "inventory": 99999,
            "visible": True,
        },
        {
            "id": 2,
            "name": "Dell Latitude E5470 Battery",
            "brand": "Dell",
            "sku": "DL-E5470",
            "description": "6-cell original battery",
            "collection": "Batteries",
            "type": "original",
            "price": 2400.0,
            "inventory": 3,
            "visible": True,
        },
        {
            "id": 3,
            "name": "65W Dell Adapter",
            "brand": "Dell",
            "sku": "DELL-65-W",
            "description": "Replacement charger with 4.5mm pin",
            "collection": "Adapter",
            "type": "compatible",
            "price": 1100.0,
            "inventory": 0,
            "visible": True,
            "productOptionDescription1": "Blue tip, 4.5mm",
        },
        {
            "id": 4,
            "name": "Logitech Wireless Mouse",
            "brand": "Logitech",
            "sku": "LOG-M185",
            "description": None,
            "collection": "Mouse",
            "type": "original",
            "price": 1250.0,
            "inventory": None,
            "visible": False,
        },
    ]


@pytest.fixture
def memory_store(sample_records):
    return InMemoryCatalogStore(sample_records)


@pytest.fixture
def sqlite_url(tmp_path):
    return f"sqlite:///{tmp_path / 'storefront.db'}"


@pytest.fixture
def database(sqlite_url):
    """An initialized file-backed SQLite database, closed after the test."""
    init_database(sqlite_url)
    yield sqlite_url
    close_database()


@pytest.fixture
def restore_root_logger():
    """Put the root logger back the way it was after configure_logging() tests."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
