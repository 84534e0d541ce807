"""Data access layer for products and contact messages.

Repositories wrap a SQLAlchemy session and speak in catalog records (dicts)
for products and in domain models for contact messages.
"""

import logging
from datetime import datetime
from typing import Any, Collection, Dict, Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.models import ContactMessage

from .exceptions import DataIntegrityError, PersistenceError, RecordNotFoundError
from .schema import ContactMessageModel, ProductModel, _format_datetime

logger = logging.getLogger(__name__)


class ProductRepository:
    """Repository for product rows."""

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, product_id: int) -> Optional[Dict[str, Any]]:
        """Return the product record, or None if no such id.

        Raises:
            PersistenceError: If a database error occurs
        """
        try:
            model = self.session.get(ProductModel, product_id)
            return model.to_record() if model else None
        except SQLAlchemyError as e:
            logger.error(f"Error retrieving product {product_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to retrieve product: {e}") from e

    def list_products(
        self,
        collections: Optional[Collection[str]] = None,
        limit: Optional[int] = None,
    ) -> List[Dict[str, Any]]:
        """Return products ordered by id.

        Args:
            collections: Exact collection values to include (None = all)
            limit: Maximum number of rows (None = unlimited)

        Raises:
            PersistenceError: If a database error occurs
        """
        try:
            stmt = select(ProductModel).order_by(ProductModel.id)
            if collections is not None:
                stmt = stmt.where(ProductModel.collection.in_(list(collections)))
            if limit is not None:
                stmt = stmt.limit(limit)

            return [model.to_record() for model in self.session.execute(stmt).scalars().all()]

        except SQLAlchemyError as e:
            logger.error(f"Error listing products: {e}", exc_info=True)
            raise PersistenceError(f"Failed to list products: {e}") from e

    def count(self) -> int:
        try:
            return self.session.execute(select(func.count(ProductModel.id))).scalar_one()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to count products: {e}") from e

    def insert_many(self, records: Iterable[Dict[str, Any]]) -> int:
        """Insert product records in one flush and return how many were added.

        Raises:
            DataIntegrityError: If a row violates a constraint (e.g. duplicate id)
            PersistenceError: If another database error occurs
        """
        try:
            models = [ProductModel.from_record(record) for record in records]
            self.session.add_all(models)
            self.session.flush()
            return len(models)

        except IntegrityError as e:
            logger.error(f"Constraint violation inserting products: {e}")
            raise DataIntegrityError(f"Failed to insert products: {e}") from e
        except SQLAlchemyError as e:
            logger.error(f"Error inserting products: {e}", exc_info=True)
            raise PersistenceError(f"Failed to insert products: {e}") from e

    def update(self, product_id: int, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Apply a partial update and return the updated record.

        Raises:
            RecordNotFoundError: If the product does not exist
            PersistenceError: If a database error occurs
        """
        try:
            model = self.session.get(ProductModel, product_id)
            if model is None:
                raise RecordNotFoundError(f"Product {product_id} not found", record_id=product_id)

            model.apply(changes)
            self.session.flush()
            return model.to_record()

        except SQLAlchemyError as e:
            logger.error(f"Error updating product {product_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to update product: {e}") from e

    def delete(self, product_id: int) -> None:
        """Delete a product.

        Raises:
            RecordNotFoundError: If the product does not exist
            PersistenceError: If a database error occurs
        """
        try:
            model = self.session.get(ProductModel, product_id)
            if model is None:
                raise RecordNotFoundError(f"Product {product_id} not found", record_id=product_id)

            self.session.delete(model)
            self.session.flush()

        except SQLAlchemyError as e:
            logger.error(f"Error deleting product {product_id}: {e}", exc_info=True)
            raise PersistenceError(f"Failed to delete product: {e}") from e


class ContactMessageRepository:
    """Repository for contact form submissions."""

    def __init__(self, session: Session):
        self.session = session

    def add(self, message: ContactMessage) -> ContactMessage:
        """Store a message and return it with its assigned id."""
        try:
            model = ContactMessageModel.from_domain(message)
            self.session.add(model)
            self.session.flush()
            return model.to_domain()
        except SQLAlchemyError as e:
            logger.error(f"Error storing contact message: {e}", exc_info=True)
            raise PersistenceError(f"Failed to store contact message: {e}") from e

    def mark_notified(self, message_id: int, notified_at: datetime) -> None:
        """Record when the store inbox was emailed about a message.

        Raises:
            RecordNotFoundError: If the message does not exist
        """
        try:
            model = self.session.get(ContactMessageModel, message_id)
            if model is None:
                raise RecordNotFoundError(
                    f"Contact message {message_id} not found", record_id=message_id
                )
            model.notified_at = _format_datetime(notified_at)
            self.session.flush()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to update contact message: {e}") from e

    def list_recent(self, limit: int = 50) -> List[ContactMessage]:
        """Most recent messages first."""
        try:
            stmt = (
                select(ContactMessageModel)
                .order_by(ContactMessageModel.submitted_at.desc())
                .limit(limit)
            )
            return [model.to_domain() for model in self.session.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to list contact messages: {e}") from e

    def list_unnotified(self) -> List[ContactMessage]:
        """Messages that have not been forwarded to the store inbox yet."""
        try:
            stmt = (
                select(ContactMessageModel)
                .where(ContactMessageModel.notified_at.is_(None))
                .order_by(ContactMessageModel.submitted_at)
            )
            return [model.to_domain() for model in self.session.execute(stmt).scalars().all()]
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to list contact messages: {e}") from e
