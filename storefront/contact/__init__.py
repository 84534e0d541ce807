"""Contact form handling."""

from .service import THANK_YOU, ContactService, ContactSubmissionResult, ContactValidationError

__all__ = ["ContactService", "ContactSubmissionResult", "ContactValidationError", "THANK_YOU"]
