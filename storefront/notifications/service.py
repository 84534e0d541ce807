"""Forwards contact-form inquiries to the store inbox by email."""

import logging
import time
from email.message import EmailMessage
from typing import Optional

from storefront.config.environment import EnvironmentConfig
from storefront.config.models import EmailConfig
from storefront.domain.models import ContactMessage
from storefront.logging import get_logger

from .models import DeliveryResult, NotificationTemplateError, SMTPDeliveryError
from .payloads import build_inquiry_context
from .smtp_client import SMTPClient, build_sender_address, parse_recipients
from .templates import TemplateRenderer

logger = get_logger(__name__, component="notification")

MAX_RETRY_DELAY_SECONDS = 60.0


class InquiryNotifier:
    """Renders an inquiry email and delivers it with retry and backoff.

    Never raises for delivery problems; the outcome is reported in the
    returned DeliveryResult.
    """

    def __init__(
        self,
        template_renderer: Optional[TemplateRenderer] = None,
        smtp_client: Optional[SMTPClient] = None,
        logger_instance: Optional[logging.Logger] = None,
        sleep=time.sleep,
    ):
        self.template_renderer = template_renderer or TemplateRenderer()
        self.smtp_client = smtp_client or SMTPClient()
        self.logger = logger_instance or logger
        self._sleep = sleep

    def build_message(self, inquiry: ContactMessage, env_config: EnvironmentConfig) -> EmailMessage:
        """
        Raises:
            NotificationTemplateError: If rendering fails
            ValueError: If CONTACT_TO_EMAIL holds no valid address
        """
        rendered = self.template_renderer.render(build_inquiry_context(inquiry))

        message = EmailMessage()
        message["Subject"] = rendered["subject"]
        message["From"] = build_sender_address(env_config)
        message["To"] = ", ".join(parse_recipients(env_config.contact_to_email))
        message["Reply-To"] = inquiry.email
        message.set_content(rendered["text_body"])
        message.add_alternative(rendered["html_body"], subtype="html")
        return message

    def send(
        self,
        inquiry: ContactMessage,
        env_config: EnvironmentConfig,
        email_config: EmailConfig,
    ) -> DeliveryResult:
        if not email_config.enabled or not env_config.smtp_configured:
            self.logger.info(
                "Skipping inquiry email - SMTP not configured or disabled",
                extra={"event": "notification.skip", "reason": "not_configured"},
            )
            return DeliveryResult(attempts=0, status="skipped")

        try:
            message = self.build_message(inquiry, env_config)
        except (NotificationTemplateError, ValueError) as e:
            error_msg = f"Failed to build inquiry email: {e}"
            self.logger.error(error_msg, extra={"event": "notification.build.failed"})
            return DeliveryResult(attempts=0, status="failed", error=error_msg)

        max_attempts = email_config.max_retries + 1
        last_error = None

        for attempt in range(1, max_attempts + 1):
            if attempt > 1:
                delay = min(
                    email_config.retry_initial_delay
                    * (email_config.retry_backoff_multiplier ** (attempt - 2)),
                    MAX_RETRY_DELAY_SECONDS,
                )
                self.logger.warning(
                    f"Retrying inquiry email (attempt {attempt}/{max_attempts}) after {delay:.1f}s",
                    extra={"event": "notification.send.attempt", "attempt": attempt},
                )
                self._sleep(delay)

            try:
                self.smtp_client.send(message, env_config, email_config.use_tls)
            except SMTPDeliveryError as e:
                last_error = str(e)
                self.logger.warning(
                    f"Inquiry email failed (attempt {attempt}/{max_attempts}): {e}",
                    extra={
                        "event": "notification.send.failure",
                        "attempt": attempt,
                        "retry_remaining": attempt < max_attempts,
                    },
                )
                continue

            self.logger.info(
                f"Inquiry email sent to {message['To']}",
                extra={"event": "notification.send.success", "attempt": attempt},
            )
            return DeliveryResult(attempts=attempt, status="sent")

        self.logger.error(
            f"Inquiry email failed after {max_attempts} attempts: {last_error}",
            extra={"event": "notification.send.exhausted", "attempts": max_attempts},
        )
        return DeliveryResult(attempts=max_attempts, status="failed", error=last_error)
