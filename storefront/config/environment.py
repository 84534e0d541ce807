"""Environment variable loading and validation."""

import os
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email

from .exceptions import ConfigurationError

DEFAULT_DATABASE_URL = "sqlite:///./data/storefront.db"
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class EnvironmentConfig:
    """Secrets and deployment-specific settings taken from the environment."""

    def __init__(
        self,
        database_url: Optional[str] = None,
        catalog_api_url: Optional[str] = None,
        catalog_api_key: Optional[str] = None,
        log_level: Optional[str] = None,
        smtp_host: Optional[str] = None,
        smtp_port: Optional[int] = None,
        smtp_user: Optional[str] = None,
        smtp_pass: Optional[str] = None,
        contact_to_email: Optional[str] = None,
        smtp_sender_name: Optional[str] = None,
    ):
        self.database_url = database_url or DEFAULT_DATABASE_URL
        self.catalog_api_url = catalog_api_url.rstrip("/") if catalog_api_url else None
        self.catalog_api_key = catalog_api_key
        self.log_level = log_level
        self.smtp_host = smtp_host
        self.smtp_port = smtp_port
        self.smtp_user = smtp_user
        self.smtp_pass = smtp_pass
        self.contact_to_email = contact_to_email
        self.smtp_sender_name = smtp_sender_name or "Storefront"

    @property
    def smtp_configured(self) -> bool:
        """True when enough SMTP settings exist to forward contact messages."""
        return bool(self.smtp_host and self.smtp_port and self.contact_to_email)

    @property
    def catalog_api_configured(self) -> bool:
        return bool(self.catalog_api_url and self.catalog_api_key)


def load_environment_config(require_catalog_api: bool = False) -> EnvironmentConfig:
    """
    Load and validate environment variables.

    Optional environment variables:
    - DATABASE_URL: Local database URL (default: sqlite:///./data/storefront.db)
    - CATALOG_API_URL / CATALOG_API_KEY: Hosted catalog backend (required for
      the rest store backend)
    - LOG_LEVEL: Override log level
    - SMTP_HOST / SMTP_PORT / SMTP_USER / SMTP_PASS / SMTP_SENDER_NAME
    - CONTACT_TO_EMAIL: Inbox that receives contact-form inquiries

    Args:
        require_catalog_api: Fail if the hosted backend settings are missing

    Raises:
        ConfigurationError: If any variable is missing or invalid
    """
    errors: List[str] = []

    database_url = os.getenv("DATABASE_URL")
    catalog_api_url = os.getenv("CATALOG_API_URL")
    catalog_api_key = os.getenv("CATALOG_API_KEY")
    log_level = os.getenv("LOG_LEVEL")
    smtp_host = os.getenv("SMTP_HOST")
    smtp_port_str = os.getenv("SMTP_PORT")
    smtp_user = os.getenv("SMTP_USER")
    smtp_pass = os.getenv("SMTP_PASS")
    smtp_sender_name = os.getenv("SMTP_SENDER_NAME")
    contact_to_email = os.getenv("CONTACT_TO_EMAIL")

    if require_catalog_api:
        if not catalog_api_url:
            errors.append("Missing required environment variable: CATALOG_API_URL")
        if not catalog_api_key:
            errors.append("Missing required environment variable: CATALOG_API_KEY")

    if catalog_api_url and not catalog_api_url.startswith(("http://", "https://")):
        errors.append(f"Invalid CATALOG_API_URL: '{catalog_api_url}'. Must start with http:// or https://")

    if log_level and log_level.upper() not in VALID_LOG_LEVELS:
        errors.append(
            f"Invalid LOG_LEVEL: '{log_level}'. Must be one of: {', '.join(VALID_LOG_LEVELS)}"
        )

    smtp_port = None
    if smtp_port_str:
        try:
            smtp_port = int(smtp_port_str)
            if not 1 <= smtp_port <= 65535:
                errors.append(f"Invalid SMTP_PORT: {smtp_port}. Must be between 1 and 65535.")
        except ValueError:
            errors.append(f"Invalid SMTP_PORT: '{smtp_port_str}'. Must be a valid integer.")

    # SMTP is optional, but a partial setup is almost always a mistake
    smtp_settings = {"SMTP_HOST": smtp_host, "SMTP_PORT": smtp_port_str, "CONTACT_TO_EMAIL": contact_to_email}
    if any(smtp_settings.values()):
        for name, value in smtp_settings.items():
            if not value:
                errors.append(f"{name} must be set when contact email notifications are configured")

    if smtp_user and not smtp_pass:
        errors.append("SMTP_USER is set but SMTP_PASS is not. Both must be set for authentication.")
    elif smtp_pass and not smtp_user:
        errors.append("SMTP_PASS is set but SMTP_USER is not. Both must be set for authentication.")

    if contact_to_email:
        for address in (part.strip() for part in contact_to_email.split(",")):
            try:
                validate_email(address, check_deliverability=False)
            except EmailNotValidError:
                errors.append(f"Invalid email address format in CONTACT_TO_EMAIL: '{address}'")

    if errors:
        raise ConfigurationError(
            "Environment variable validation failed",
            errors=errors,
            suggestions=[
                "Copy .env.example to .env and fill in your settings",
                "Set CATALOG_API_URL and CATALOG_API_KEY when using the rest store backend",
                "Set SMTP_HOST, SMTP_PORT and CONTACT_TO_EMAIL together, or none of them",
            ],
        )

    return EnvironmentConfig(
        database_url=database_url,
        catalog_api_url=catalog_api_url,
        catalog_api_key=catalog_api_key,
        log_level=log_level,
        smtp_host=smtp_host,
        smtp_port=smtp_port,
        smtp_user=smtp_user,
        smtp_pass=smtp_pass,
        contact_to_email=contact_to_email,
        smtp_sender_name=smtp_sender_name,
    )
