"""
Mock Email Service
==================

Records messages in memory instead of delivering them.
"""

import logging
from typing import List, Optional

from utils.logging_utils import mask_value

from .interface import EmailMessage, EmailServiceInterface

logger = logging.getLogger(__name__)


class MockEmailService(EmailServiceInterface):
    """Email service for tests and local development. Always succeeds."""

    def __init__(self):
        self.sent_messages: List[EmailMessage] = []

    def send(self, message: EmailMessage) -> bool:
        recipients = [mask_value(address) for address in message.to]
        logger.info(f"[MOCK EMAIL] To: {recipients}, Subject: {message.subject}")
        self.sent_messages.append(message)
        return True

    def send_bulk(self, messages: List[EmailMessage]) -> int:
        logger.info(f"[MOCK EMAIL] Bulk send: {len(messages)} emails")
        for message in messages:
            self.send(message)
        return len(messages)

    def clear_sent_messages(self):
        self.sent_messages.clear()

    def get_sent_count(self) -> int:
        return len(self.sent_messages)

    def get_last_message(self) -> Optional[EmailMessage]:
        return self.sent_messages[-1] if self.sent_messages else None
