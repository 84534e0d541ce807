"""Thin smtplib wrapper with TLS/SSL and authentication handling."""

import logging
import smtplib
import ssl
from email.message import EmailMessage
from typing import Callable, List, Optional

from email_validator import EmailNotValidError, validate_email

from storefront.config.environment import EnvironmentConfig

from .models import SMTPDeliveryError

logger = logging.getLogger(__name__)


class SMTPClient:
    """Sends EmailMessages using the SMTP settings from the environment.

    The smtplib classes are injectable so tests never open a socket.
    """

    def __init__(
        self,
        smtp_factory: Optional[Callable] = None,
        smtp_ssl_factory: Optional[Callable] = None,
    ):
        self.smtp_factory = smtp_factory or smtplib.SMTP
        self.smtp_ssl_factory = smtp_ssl_factory or smtplib.SMTP_SSL

    def send(self, message: EmailMessage, env_config: EnvironmentConfig, use_tls: bool = True) -> None:
        """Deliver ``message``. Port 465 uses implicit TLS, other ports STARTTLS when ``use_tls``.

        Raises:
            SMTPDeliveryError: If delivery fails for any reason
        """
        smtp = None
        try:
            if env_config.smtp_port == 465:
                logger.debug(f"Connecting to {env_config.smtp_host}:465 with implicit TLS")
                smtp = self.smtp_ssl_factory(
                    env_config.smtp_host, env_config.smtp_port, context=ssl.create_default_context()
                )
            else:
                logger.debug(f"Connecting to {env_config.smtp_host}:{env_config.smtp_port}")
                smtp = self.smtp_factory(env_config.smtp_host, env_config.smtp_port)
                if use_tls:
                    smtp.starttls(context=ssl.create_default_context())

            if env_config.smtp_user and env_config.smtp_pass:
                smtp.login(env_config.smtp_user, env_config.smtp_pass)

            smtp.send_message(message)
            logger.debug(f"Message sent to {message['To']}")

        except smtplib.SMTPException as e:
            error_msg = f"SMTP error during message delivery: {e}"
            logger.error(error_msg)
            raise SMTPDeliveryError(error_msg) from e
        except OSError as e:
            error_msg = f"Network error during SMTP connection: {e}"
            logger.error(error_msg)
            raise SMTPDeliveryError(error_msg) from e
        finally:
            if smtp is not None:
                try:
                    smtp.quit()
                except (smtplib.SMTPException, OSError) as e:
                    logger.warning(f"Error closing SMTP connection: {e}")


def parse_recipients(recipient_string: Optional[str]) -> List[str]:
    """Split and validate a comma-separated address list.

    Raises:
        ValueError: If an address is invalid or the list is empty
    """
    recipients = []
    for address in (part.strip() for part in (recipient_string or "").split(",")):
        if not address:
            continue
        try:
            recipients.append(validate_email(address, check_deliverability=False).normalized)
        except EmailNotValidError as e:
            raise ValueError(f"Invalid email address in CONTACT_TO_EMAIL: '{address}' - {e}") from e

    if not recipients:
        raise ValueError("No valid email addresses found in CONTACT_TO_EMAIL")
    return recipients


def build_sender_address(env_config: EnvironmentConfig) -> str:
    """'Name <address>' using SMTP_USER, or noreply@ the SMTP host without one."""
    sender_email = env_config.smtp_user or f"noreply@{env_config.smtp_host}"
    return f"{env_config.smtp_sender_name} <{sender_email}>"
