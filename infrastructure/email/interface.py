"""
Email Service Interface
========================

Contract for the transactional email the backend sends (waitlist and demo
request confirmations).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class EmailMessage:
    """
    A single outgoing email.

    Attributes:
        subject: Subject line
        body: Plain text body
        to: Recipient addresses
        from_email: Sender address (DEFAULT_FROM_EMAIL when None)
        html_body: Optional HTML alternative
        reply_to: Optional Reply-To addresses
    """

    subject: str
    body: str
    to: List[str]
    from_email: Optional[str] = None
    html_body: Optional[str] = None
    reply_to: List[str] = field(default_factory=list)


class EmailServiceInterface(ABC):
    """
    Abstract interface for email delivery.

    Concrete implementations:
        - SMTPEmailService: delivery through Django's configured mail backend
        - MockEmailService: records messages in memory for tests
    """

    @abstractmethod
    def send(self, message: EmailMessage) -> bool:
        """
        Send one message.

        Returns:
            True if the backend accepted the message

        Raises:
            EmailException: If the backend fails
        """

    @abstractmethod
    def send_bulk(self, messages: List[EmailMessage]) -> int:
        """Send several messages and return how many were accepted."""


class EmailException(Exception):
    """Raised when the email backend cannot deliver a message."""
