"""Database schema and conversions between ORM rows and catalog records.

Frequently queried product fields get their own columns. The option,
additional-info and custom-text columns from the import spreadsheet are
kept together in a JSON ``attributes`` column and flattened back into the
record on read, so callers always see the spreadsheet shape.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Boolean, Column, Float, Index, Integer, String, Text, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

from storefront.domain.models import PRODUCT_COLUMNS, ContactMessage
from storefront.utils.timestamps import format_timestamp

logger = logging.getLogger(__name__)

Base = declarative_base()

# Record key -> ORM attribute for the fields stored in dedicated columns
PRODUCT_COLUMN_ATTRS: Dict[str, str] = {
    "handleId": "handle_id",
    "fieldType": "field_type",
    "name": "name",
    "description": "description",
    "productImageUrl": "product_image_url",
    "collection": "collection",
    "sku": "sku",
    "ribbon": "ribbon",
    "price": "price",
    "surcharge": "surcharge",
    "visible": "visible",
    "discountMode": "discount_mode",
    "discountValue": "discount_value",
    "inventory": "inventory",
    "weight": "weight",
    "cost": "cost",
    "brand": "brand",
    "type": "product_type",
}

ATTRIBUTE_FIELDS = tuple(key for key in PRODUCT_COLUMNS if key not in PRODUCT_COLUMN_ATTRS)

# Older exports name option descriptions optionDescription_N
OPTION_DESCRIPTION_KEY = re.compile(r"^(?:productOptionDescription|optionDescription_?)(\d+)$")


def canonical_record_key(key: str) -> str:
    """Return the spreadsheet name for ``key`` (``optionDescription_2`` -> ``productOptionDescription2``)."""
    match = OPTION_DESCRIPTION_KEY.match(key)
    return f"productOptionDescription{match.group(1)}" if match else key


class ProductModel(Base):
    """ORM model for the products table."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)

    handle_id = Column(String(255), nullable=True)
    field_type = Column(String(50), nullable=True)
    name = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    product_image_url = Column(Text, nullable=True)
    collection = Column(String(255), nullable=True)
    sku = Column(String(255), nullable=True)
    ribbon = Column(String(255), nullable=True)
    brand = Column(String(255), nullable=True)
    product_type = Column(String(50), nullable=True)

    price = Column(Float, nullable=True)
    surcharge = Column(Float, nullable=True)
    discount_mode = Column(String(50), nullable=True)
    discount_value = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)
    cost = Column(Float, nullable=True)

    inventory = Column(Integer, nullable=True)
    visible = Column(Boolean, nullable=True)

    attributes = Column(JSON, nullable=False, default=dict)

    __table_args__ = (
        Index("idx_products_collection", "collection"),
        Index("idx_products_brand", "brand"),
        Index("idx_products_sku", "sku"),
    )

    def to_record(self) -> Dict[str, Any]:
        """Flatten the row into a catalog record (spreadsheet key order)."""
        attributes = self.attributes or {}
        record: Dict[str, Any] = {"id": self.id}
        for key in PRODUCT_COLUMNS:
            attr = PRODUCT_COLUMN_ATTRS.get(key)
            record[key] = getattr(self, attr) if attr else attributes.get(key)
        # Option descriptions past the spreadsheet columns
        for key, value in attributes.items():
            record.setdefault(key, value)
        return record

    def apply(self, values: Dict[str, Any]) -> None:
        """Copy known record keys onto the row. ``id`` and unknown keys are ignored.

        Option descriptions are kept under any numeric suffix, whichever
        spelling the record uses.
        """
        attributes = dict(self.attributes or {})
        for key, value in values.items():
            key = canonical_record_key(key)
            attr = PRODUCT_COLUMN_ATTRS.get(key)
            if attr:
                setattr(self, attr, value)
            elif key in ATTRIBUTE_FIELDS or OPTION_DESCRIPTION_KEY.match(key):
                if value is None:
                    attributes.pop(key, None)
                else:
                    attributes[key] = value
        # Reassign so the JSON column is flagged dirty
        self.attributes = attributes

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "ProductModel":
        model = cls(attributes={})
        if record.get("id") is not None:
            model.id = int(record["id"])
        model.apply(record)
        return model


class ContactMessageModel(Base):
    """ORM model for the contact_messages table."""

    __tablename__ = "contact_messages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(320), nullable=False)
    message = Column(Text, nullable=False)

    # ISO 8601 strings
    submitted_at = Column(String(50), nullable=False)
    notified_at = Column(String(50), nullable=True)

    __table_args__ = (Index("idx_contact_messages_submitted_at", "submitted_at"),)

    def to_domain(self) -> ContactMessage:
        return ContactMessage(
            id=self.id,
            name=self.name,
            email=self.email,
            message=self.message,
            submitted_at=_parse_datetime(self.submitted_at),
        )

    @classmethod
    def from_domain(cls, message: ContactMessage) -> "ContactMessageModel":
        return cls(
            id=message.id,
            name=message.name,
            email=message.email,
            message=message.message,
            submitted_at=_format_datetime(message.submitted_at),
        )


def _format_datetime(dt: Optional[datetime]) -> Optional[str]:
    """Format a datetime as an ISO 8601 UTC string with a Z suffix."""
    if dt is None:
        return None
    return format_timestamp(dt, include_microseconds=True)


def _parse_datetime(dt_str: Optional[str]) -> Optional[datetime]:
    """Parse a string written by _format_datetime back into an aware datetime."""
    if not dt_str:
        return None

    dt_str = dt_str.rstrip("Z")
    try:
        dt = datetime.strptime(dt_str, "%Y-%m-%dT%H:%M:%S.%f")
    except ValueError:
        dt = datetime.strptime(dt_str, "%Y-%m-%dT%H:%M:%S")
    return dt.replace(tzinfo=timezone.utc)


def create_schema(engine: Engine) -> None:
    """Create all tables and indexes that do not exist yet (idempotent)."""
    try:
        Base.metadata.create_all(engine, checkfirst=True)
        tables = inspect(engine).get_table_names()
        logger.info(f"Database schema ready. Tables: {', '.join(tables)}")
    except Exception as e:
        logger.error(f"Failed to create database schema: {e}", exc_info=True)
        raise
