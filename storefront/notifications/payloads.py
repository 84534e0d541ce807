"""Template context for contact inquiry emails."""

from typing import Any, Dict

from storefront.domain.models import ContactMessage
from storefront.utils.timestamps import format_timestamp


def build_inquiry_context(message: ContactMessage) -> Dict[str, Any]:
    return {
        "message_id": message.id,
        "sender_name": message.name,
        "sender_email": message.email,
        "body": message.message,
        "body_lines": message.message.splitlines() or [message.message],
        "submitted_at": format_timestamp(message.submitted_at),
    }
