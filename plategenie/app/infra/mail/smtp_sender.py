from __future__ import annotations

import logging
import smtplib
from email.message import EmailMessage

from plategenie.app.domain.errors import DeliveryError
from plategenie.app.infra.mail.base import MailSender

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 15.0


class SmtpMailSender(MailSender):
    def __init__(
        self,
        host: str,
        port: int,
        sender: str,
        username: str | None = None,
        password: str | None = None,
        use_tls: bool = True,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> None:
        self.host = host
        self.port = port
        self.sender = sender
        self.username = username
        self.password = password
        self.use_tls = use_tls
        self.timeout = timeout

    def _build_message(self, to_address: str, subject: str, html_body: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = to_address
        message["Subject"] = subject
        message.set_content("Open this email in an HTML-capable client to read it.")
        message.add_alternative(html_body, subtype="html")
        return message

    def send(self, to_address: str, subject: str, html_body: str) -> None:
        if not self.host:
            raise DeliveryError(to_address, "SMTP host is not configured")

        message = self._build_message(to_address, subject, html_body)
        try:
            with smtplib.SMTP(self.host, self.port, timeout=self.timeout) as smtp:
                if self.use_tls:
                    smtp.starttls()
                if self.username:
                    smtp.login(self.username, self.password or "")
                smtp.send_message(message)
        except (smtplib.SMTPException, OSError) as error:
            logger.error("Failed to send email to %s: %s", to_address, error)
            raise DeliveryError(to_address) from error

        logger.info("Email sent to %s", to_address)
