"""Email notification base — mail rendering plus a pluggable transport.

Subclasses set up their transport in `init_transport()` and deliver in
`send_mail()`. Named emails are registered in `emails` and sent with `send()`.
"""

import inspect
from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Optional, Union

import structlog

from nore.modules.notifications.generator import MailGenerator
from nore.modules.notifications.models import MailBody, MailContent, MailData, MailGeneratorOptions

logger = structlog.get_logger()

# Builds the MailData for a named email
EmailBuilder = Callable[..., Union[MailData, Awaitable[MailData]]]


class EmailNotification(ABC):
    """Abstract email notifier."""

    def __init__(self, generator: Union[MailGeneratorOptions, dict]):
        self.mail_generator = MailGenerator(generator)
        self.transport: Optional[Any] = None
        self.emails: dict[str, EmailBuilder] = {}

        self.init_transport()

    def init_transport(self) -> None:
        """Initialize the transport. No-op by default."""

    def mail(self, content: Union[MailContent, dict]) -> MailBody:
        """Build the text and HTML bodies of a mail."""
        return MailBody(
            text=self.mail_generator.generate_plaintext(content),
            html=self.mail_generator.generate(content),
        )

    def render(self, mail_data: MailData) -> MailBody:
        """Bodies for `mail_data`: explicit text/html win over rendered content."""
        if mail_data.content is not None:
            body = self.mail(mail_data.content)
        else:
            body = MailBody(text="", html="")
        return MailBody(
            text=mail_data.text if mail_data.text is not None else body.text,
            html=mail_data.html if mail_data.html is not None else body.html,
        )

    async def send(self, name: str, *args: Any, **kwargs: Any) -> Any:
        """Build the email registered as `name` and send it."""
        builder = self.emails.get(name)
        if builder is None:
            raise KeyError(f"No email registered as '{name}'")

        mail_data = builder(*args, **kwargs)
        if inspect.isawaitable(mail_data):
            mail_data = await mail_data

        logger.debug("mail_building", email=name, to=mail_data.recipients)
        return await self.send_mail(mail_data)

    @abstractmethod
    async def send_mail(self, mail_data: MailData) -> Any:
        """Send a mail with the transport."""
        ...
