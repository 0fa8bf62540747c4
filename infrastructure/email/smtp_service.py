"""
SMTP Email Service
==================

Delivers mail through whatever EMAIL_BACKEND Django is configured with.
"""

import logging
from typing import List

from django.conf import settings
from django.core.mail import EmailMultiAlternatives, get_connection

from utils.logging_utils import mask_value

from .interface import EmailException, EmailMessage, EmailServiceInterface


logger = logging.getLogger(__name__)


class SMTPEmailService(EmailServiceInterface):
    """
    Django mail backend implementation.

    Configuration (in settings.py):
        EMAIL_HOST, EMAIL_PORT, EMAIL_HOST_USER, EMAIL_HOST_PASSWORD,
        EMAIL_USE_TLS, DEFAULT_FROM_EMAIL
    """

    def __init__(self):
        self.default_from = getattr(settings, "DEFAULT_FROM_EMAIL", "noreply@forme.app")

    def _build(self, message: EmailMessage, connection=None) -> EmailMultiAlternatives:
        email = EmailMultiAlternatives(
            subject=message.subject,
            body=message.body,
            from_email=message.from_email or self.default_from,
            to=message.to,
            reply_to=message.reply_to or None,
            connection=connection,
        )
        if message.html_body:
            email.attach_alternative(message.html_body, "text/html")
        return email

    def send(self, message: EmailMessage) -> bool:
        recipients = [mask_value(address) for address in message.to]
        try:
            num_sent = self._build(message).send(fail_silently=False)
        except Exception as e:
            logger.error(f"Failed to send email to {recipients}: {str(e)}")
            raise EmailException(f"Email send failed: {str(e)}") from e

        success = num_sent > 0
        if success:
            logger.info(f"Email sent successfully to {recipients}")
        else:
            logger.warning(f"Email failed to send to {recipients}")
        return success

    def send_bulk(self, messages: List[EmailMessage]) -> int:
        try:
            connection = get_connection(fail_silently=False)
            num_sent = connection.send_messages([self._build(msg, connection) for msg in messages])
        except Exception as e:
            logger.error(f"Failed to send bulk emails: {str(e)}")
            raise EmailException(f"Bulk email send failed: {str(e)}") from e

        logger.info(f"Bulk email: sent {num_sent} of {len(messages)} emails")
        return num_sent or 0
