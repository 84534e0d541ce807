"""Result model and exceptions for outgoing email."""

from dataclasses import dataclass
from typing import Optional


class NotificationError(Exception):
    """Base exception for notification failures."""

    pass


class NotificationTemplateError(NotificationError):
    """A template is missing or referenced an undefined variable."""

    pass


class SMTPDeliveryError(NotificationError):
    """The SMTP server could not be reached or refused the message."""

    pass


@dataclass
class DeliveryResult:
    """
    Outcome of emailing one inquiry to the store inbox.

    Attributes:
        attempts: Send attempts made (0 when nothing was tried)
        status: "sent", "skipped" or "failed"
        error: Failure message when status is "failed"
    """

    attempts: int
    status: str
    error: Optional[str] = None

    def is_success(self) -> bool:
        return self.status == "sent"
