"""SMTP email notification — delivers rendered mails over SMTP."""

import asyncio
import smtplib
from dataclasses import dataclass
from email.message import EmailMessage
from typing import Optional, Union

import structlog

from nore.config import get_settings
from nore.errors import MailTransportError
from nore.modules.notifications.base import EmailNotification
from nore.modules.notifications.models import MailData, MailGeneratorOptions

logger = structlog.get_logger()


@dataclass(frozen=True)
class SMTPTransport:
    host: str
    port: int
    username: str = ""
    password: str = ""
    starttls: bool = False
    timeout: float = 30.0


class SMTPEmailNotification(EmailNotification):
    """EmailNotification delivering through an SMTP server.

    Connection settings default to the SMTP_* settings.
    """

    transport: SMTPTransport

    def __init__(
        self,
        generator: Union[MailGeneratorOptions, dict],
        transport: Optional[SMTPTransport] = None,
        sender: Optional[str] = None,
    ):
        self._transport_override = transport
        self.sender = sender or get_settings().MAIL_FROM
        super().__init__(generator)

    def init_transport(self) -> None:
        if self._transport_override is not None:
            self.transport = self._transport_override
            return

        settings = get_settings()
        self.transport = SMTPTransport(
            host=settings.SMTP_HOST,
            port=settings.SMTP_PORT,
            username=settings.SMTP_USERNAME,
            password=settings.SMTP_PASSWORD,
            starttls=settings.SMTP_STARTTLS,
        )

    def build_message(self, mail_data: MailData) -> EmailMessage:
        body = self.render(mail_data)
        message = EmailMessage()
        message["Subject"] = mail_data.subject
        message["From"] = mail_data.sender or self.sender
        message["To"] = ", ".join(mail_data.recipients)
        message.set_content(body.text)
        if body.html:
            message.add_alternative(body.html, subtype="html")
        return message

    def _deliver(self, message: EmailMessage) -> None:
        transport = self.transport
        with smtplib.SMTP(transport.host, transport.port, timeout=transport.timeout) as smtp:
            if transport.starttls:
                smtp.starttls()
            if transport.username:
                smtp.login(transport.username, transport.password)
            smtp.send_message(message)

    async def send_mail(self, mail_data: MailData) -> EmailMessage:
        """Send `mail_data` and return the delivered message."""
        message = self.build_message(mail_data)
        try:
            await asyncio.to_thread(self._deliver, message)
        except (smtplib.SMTPException, OSError) as e:
            logger.error(
                "mail_send_failed",
                host=self.transport.host,
                to=mail_data.recipients,
                error=str(e),
            )
            raise MailTransportError(f"Failed to send mail to {message['To']}: {e}") from e

        logger.info("mail_sent", to=mail_data.recipients, subject=mail_data.subject)
        return message
