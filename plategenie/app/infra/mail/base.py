# plategenie/app/infra/mail/base.py
"""
Abstract base class for outbound email.
"""
from __future__ import annotations

from abc import ABC, abstractmethod


class MailSender(ABC):
    """
    Sends a single HTML email.

    Implementations:
    - SmtpMailSender: any SMTP relay (Gmail, SES, Mailgun, ...)
    """

    @abstractmethod
    def send(self, to_address: str, subject: str, html_body: str) -> None:
        """
        Deliver one message.

        Args:
            to_address: Recipient address
            subject: Subject line
            html_body: HTML content

        Raises:
            DeliveryError: If the message could not be handed to the transport
        """
        pass
