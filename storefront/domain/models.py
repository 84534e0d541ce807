"""Core domain definitions for products, categories and contact messages.

Products travel through the system as plain dicts (catalog records) keyed by
the spreadsheet column names below, because both the hosted backend and the
import spreadsheets use that shape. Categories and contact messages are
validated Pydantic models.
"""

from datetime import datetime
from enum import Enum
from typing import Dict, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, Field, field_validator

from storefront.utils.timestamps import ensure_utc, utc_now

# Inventory value that stands for "in stock, quantity not tracked"
IN_STOCK_SENTINEL = 99999

MAX_PRODUCT_OPTIONS = 6
MAX_ADDITIONAL_INFO = 6
MAX_CUSTOM_TEXT_FIELDS = 2


class ProductType(str, Enum):
    """Whether a product is the brand's own part or a third-party equivalent."""

    ORIGINAL = "original"
    COMPATIBLE = "compatible"


def _build_product_columns() -> Dict[str, str]:
    columns = {
        "handleId": "text",
        "fieldType": "text",
        "name": "text",
        "description": "text",
        "productImageUrl": "text",
        "collection": "text",
        "sku": "text",
        "ribbon": "text",
        "price": "numeric",
        "surcharge": "numeric",
        "visible": "boolean",
        "discountMode": "text",
        "discountValue": "numeric",
        "inventory": "inventory",
        "weight": "numeric",
        "cost": "numeric",
    }
    for n in range(1, MAX_PRODUCT_OPTIONS + 1):
        columns[f"productOptionName{n}"] = "text"
        columns[f"productOptionType{n}"] = "text"
        columns[f"productOptionDescription{n}"] = "text"
    for n in range(1, MAX_ADDITIONAL_INFO + 1):
        columns[f"additionalInfoTitle{n}"] = "text"
        columns[f"additionalInfoDescription{n}"] = "text"
    for n in range(1, MAX_CUSTOM_TEXT_FIELDS + 1):
        columns[f"customTextField{n}"] = "text"
        columns[f"customTextCharLimit{n}"] = "integer"
        columns[f"customTextMandatory{n}"] = "boolean"
    columns["brand"] = "text"
    columns["type"] = "text"
    return columns


# Spreadsheet column -> coercion type, in spreadsheet order
PRODUCT_COLUMNS: Dict[str, str] = _build_product_columns()


class Category(BaseModel):
    """A canonical storefront category.

    ``collection`` is the canonical label handed to the alias resolver; it is
    usually equal to ``title``.
    """

    title: str = Field(..., min_length=1, description="Label shown on the category card")
    collection: Optional[str] = Field(None, description="Canonical collection label")
    image: Optional[str] = Field(None, description="Card image path or URL")

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Category title cannot be empty or whitespace-only")
        return stripped

    @property
    def label(self) -> str:
        """The label used for alias resolution."""
        return self.collection or self.title


class ContactMessage(BaseModel):
    """An inquiry submitted through the contact form."""

    id: Optional[int] = Field(None, description="Database id once stored")
    name: str = Field(..., description="Sender name")
    email: str = Field(..., description="Sender email address (normalized)")
    message: str = Field(..., description="Free-text inquiry")
    submitted_at: datetime = Field(
        default_factory=utc_now,
        description="When the form was submitted (UTC)",
    )

    @field_validator("name", "message")
    @classmethod
    def strip_required_text(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            raise ValueError("Field cannot be empty or whitespace-only")
        return stripped

    @field_validator("email")
    @classmethod
    def validate_sender_email(cls, v: str) -> str:
        try:
            return validate_email(v.strip(), check_deliverability=False).normalized
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email address: {e}") from e

    @field_validator("submitted_at")
    @classmethod
    def submitted_at_utc(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    model_config = {"json_schema_extra": {"example": {
        "name": "Suresh Gupta",
        "email": "suresh@example.com",
        "message": "Do you stock HP 510 batteries in bulk?",
        "submitted_at": "2025-11-03T10:30:00Z",
    }}}
