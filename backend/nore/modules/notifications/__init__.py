"""Email notifications.

Usage:
    notifier = SMTPEmailNotification(generator={"product": {"name": "Nore", "link": "https://nore.dev"}})
    await notifier.send_mail(MailData(to="user@example.com", subject="Welcome", content={"name": "Ada"}))
"""

from nore.modules.notifications.base import EmailNotification
from nore.modules.notifications.generator import MailGenerator
from nore.modules.notifications.models import (
    MailAction,
    MailBody,
    MailButton,
    MailContent,
    MailData,
    MailGeneratorOptions,
    MailProduct,
    MailTable,
)
from nore.modules.notifications.smtp import SMTPEmailNotification, SMTPTransport

__all__ = [
    "EmailNotification",
    "MailGenerator",
    "MailAction",
    "MailBody",
    "MailButton",
    "MailContent",
    "MailData",
    "MailGeneratorOptions",
    "MailProduct",
    "MailTable",
    "SMTPEmailNotification",
    "SMTPTransport",
]
