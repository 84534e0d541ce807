"""Email notifications for contact-form inquiries.

- InquiryNotifier: renders and delivers an inquiry with retry/backoff
- TemplateRenderer: Jinja2 templates from email_templates/
- SMTPClient: smtplib wrapper with TLS/SSL support
"""

from .models import (
    DeliveryResult,
    NotificationError,
    NotificationTemplateError,
    SMTPDeliveryError,
)
from .payloads import build_inquiry_context
from .service import InquiryNotifier
from .smtp_client import SMTPClient, build_sender_address, parse_recipients
from .templates import TemplateRenderer

__all__ = [
    "InquiryNotifier",
    "DeliveryResult",
    "NotificationError",
    "NotificationTemplateError",
    "SMTPDeliveryError",
    "TemplateRenderer",
    "SMTPClient",
    "build_inquiry_context",
    "build_sender_address",
    "parse_recipients",
]
