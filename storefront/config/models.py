"""Configuration schema models using Pydantic."""

from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from storefront.domain.models import Category
from storefront.search.aliases import DEFAULT_CATEGORY_ALIASES


class StoreBackend(str, Enum):
    """Where catalog records are read from and written to."""

    SQL = "sql"
    MEMORY = "memory"
    REST = "rest"


class LogLevel(str, Enum):
    """Logging levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class LogFormat(str, Enum):
    """Log output formats."""

    JSON = "json"
    KEY_VALUE = "key-value"


DEFAULT_CATEGORIES = [
    {"title": "Batteries", "image": "/images/batteries.jpg"},
    {"title": "Adapters", "image": "/images/Adapters1.webp"},
    {"title": "Docking Station", "image": "/images/DockingStation.webp"},
    {"title": "Locks", "image": "/images/Locks.webp"},
    {"title": "Headphones", "image": "/images/headPhones.jpg"},
    {"title": "Mouse", "image": "/images/mouse1.webp"},
    {"title": "Screens", "image": "/images/screen.jpg"},
    {"title": "Privacy Filters", "image": "/images/privacy.webp"},
    {"title": "Stands", "image": "/images/stand.webp"},
    {"title": "Bags", "image": "/images/bag1.avif"},
    {"title": "Webcams", "image": "/images/webcam.avif"},
    {"title": "Cables", "image": "/images/cable.jpg"},
]


def _default_categories() -> List[Category]:
    return [Category(**category) for category in DEFAULT_CATEGORIES]


def _default_aliases() -> Dict[str, List[str]]:
    return {label: sorted(variants) for label, variants in DEFAULT_CATEGORY_ALIASES.items()}


class StoreConfig(BaseModel):
    """Catalog store selection."""

    backend: StoreBackend = Field(StoreBackend.SQL, description="sql, memory or rest")
    table: str = Field("products", min_length=1, description="Table name on the hosted backend")
    seed_sample_data: bool = Field(
        False, description="Load the bundled sample catalog into an empty store"
    )

    model_config = {"use_enum_values": True}


class CatalogConfig(BaseModel):
    """Storefront catalog behaviour."""

    best_sellers_limit: int = Field(4, ge=1, le=50, description="Products on the home page")
    admin_page_size: int = Field(15, ge=1, le=500, description="Rows in the admin table")
    categories: List[Category] = Field(
        default_factory=_default_categories, description="Fixed category list"
    )
    category_aliases: Dict[str, List[str]] = Field(
        default_factory=_default_aliases,
        description="Canonical label -> stored collection variants",
    )

    @field_validator("category_aliases")
    @classmethod
    def include_label_in_variants(cls, v: Dict[str, List[str]]) -> Dict[str, List[str]]:
        """Every label is a variant of itself; blank variants are dropped."""
        cleaned = {}
        for label, variants in v.items():
            if not label or not label.strip():
                raise ValueError("Category alias labels cannot be empty")
            kept = [variant for variant in variants if variant and variant.strip()]
            if label not in kept:
                kept.insert(0, label)
            cleaned[label] = kept
        return cleaned

    @model_validator(mode="after")
    def validate_categories(self):
        titles = [category.title for category in self.categories]
        duplicates = sorted({title for title in titles if titles.count(title) > 1})
        if duplicates:
            raise ValueError(f"Duplicate categories: {', '.join(duplicates)}")
        return self

    def get_category(self, title: str) -> Optional[Category]:
        for category in self.categories:
            if category.title == title or category.label == title:
                return category
        return None


class AuthConfig(BaseModel):
    """Admin role assignment. Authentication itself is the identity provider's job."""

    admin_emails: List[str] = Field(
        default_factory=lambda: ["admin@aggarwal.com"],
        description="Accounts granted the admin dashboard",
    )

    @field_validator("admin_emails")
    @classmethod
    def normalize_emails(cls, v: List[str]) -> List[str]:
        return [email.strip().lower() for email in v if email and email.strip()]

    def is_admin(self, email: Optional[str]) -> bool:
        return bool(email) and email.strip().lower() in self.admin_emails


class EmailConfig(BaseModel):
    """Contact-form notification settings."""

    enabled: bool = Field(True, description="Email the store inbox about new inquiries")
    use_tls: bool = Field(True, description="Use STARTTLS on non-SSL ports")
    max_retries: int = Field(2, ge=0, le=10, description="Delivery retries after the first attempt")
    retry_initial_delay: float = Field(1.0, ge=0, le=60, description="Seconds before the first retry")
    retry_backoff_multiplier: float = Field(2.0, ge=1.0, le=10.0)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(LogLevel.INFO, description="Log level")
    format: LogFormat = Field(LogFormat.KEY_VALUE, description="json or key-value")

    model_config = {"use_enum_values": True}


class AdvancedConfig(BaseModel):
    """HTTP settings for the hosted catalog backend."""

    http_request_timeout: int = Field(
        30, ge=5, le=300, description="Request timeout for catalog API calls (seconds)"
    )
    user_agent: str = Field("StorefrontCatalog/1.0", min_length=1)

    @field_validator("user_agent")
    @classmethod
    def strip_user_agent(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("user_agent cannot be empty")
        return stripped


class AppConfig(BaseModel):
    """Root configuration object for the storefront."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    email: EmailConfig = Field(default_factory=EmailConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    advanced: AdvancedConfig = Field(default_factory=AdvancedConfig)
