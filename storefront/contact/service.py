"""Contact form submission."""

from dataclasses import dataclass, field
from typing import List, Optional

from pydantic import ValidationError

from storefront.config.environment import EnvironmentConfig
from storefront.config.models import EmailConfig
from storefront.domain.models import ContactMessage
from storefront.logging import get_logger
from storefront.logging.context import log_context
from storefront.notifications.models import DeliveryResult
from storefront.notifications.service import InquiryNotifier
from storefront.persistence import ContactMessageRepository, get_session
from storefront.utils.timestamps import utc_now

logger = get_logger(__name__, component="contact")

THANK_YOU = "Thank you for your message. We will get back to you soon."


class ContactValidationError(ValueError):
    """The submitted form is incomplete or malformed."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors = errors or []

    def __str__(self) -> str:
        if not self.errors:
            return super().__str__()
        return super().__str__() + "\n" + "\n".join(f"  - {error}" for error in self.errors)


@dataclass
class ContactSubmissionResult:
    """A stored inquiry and what happened when forwarding it."""

    message: ContactMessage
    delivery: DeliveryResult = field(default_factory=lambda: DeliveryResult(attempts=0, status="skipped"))

    @property
    def confirmation(self) -> str:
        return THANK_YOU


class ContactService:
    """Stores inquiries locally, then emails them to the store inbox.

    The stored row is the record of truth: a failed email leaves it in place
    with ``notified_at`` unset so it can be forwarded later.
    """

    def __init__(
        self,
        env_config: EnvironmentConfig,
        email_config: Optional[EmailConfig] = None,
        notifier: Optional[InquiryNotifier] = None,
    ):
        self.env_config = env_config
        self.email_config = email_config or EmailConfig()
        self.notifier = notifier or InquiryNotifier()

    def submit(self, name: str, email: str, message: str) -> ContactSubmissionResult:
        """
        Raises:
            ContactValidationError: If a field is empty or the email is invalid
            PersistenceError: If the inquiry cannot be stored
        """
        try:
            inquiry = ContactMessage(name=name, email=email, message=message)
        except ValidationError as e:
            errors = [
                f"{'.'.join(str(loc) for loc in error['loc'])}: {error['msg']}" for error in e.errors()
            ]
            raise ContactValidationError("Contact form is invalid", errors=errors) from e

        with get_session() as session:
            inquiry = ContactMessageRepository(session).add(inquiry)

        with log_context(contact_message_id=inquiry.id):
            logger.info(
                "Contact message stored",
                extra={"event": "contact.submitted", "sender": inquiry.email},
            )

            delivery = self.notifier.send(inquiry, self.env_config, self.email_config)
            if delivery.is_success():
                with get_session() as session:
                    ContactMessageRepository(session).mark_notified(inquiry.id, utc_now())
            elif delivery.status == "failed":
                logger.error(
                    f"Contact message {inquiry.id} stored but not forwarded: {delivery.error}",
                    extra={"event": "contact.forward.failed"},
                )

        return ContactSubmissionResult(message=inquiry, delivery=delivery)

    def forward_pending(self) -> List[DeliveryResult]:
        """Retry forwarding every stored inquiry that was never emailed."""
        with get_session() as session:
            pending = ContactMessageRepository(session).list_unnotified()

        results = []
        for inquiry in pending:
            with log_context(contact_message_id=inquiry.id):
                delivery = self.notifier.send(inquiry, self.env_config, self.email_config)
                if delivery.is_success():
                    with get_session() as session:
                        ContactMessageRepository(session).mark_notified(inquiry.id, utc_now())
                results.append(delivery)
        return results
