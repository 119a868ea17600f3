"""
Tests for email notifications.

Tests cover:
- Rendering structured content to HTML and plain text
- The EmailNotification transport hook and named emails
- SMTP delivery and transport failures
"""

import asyncio
import smtplib
from unittest.mock import patch

import pytest
from jinja2 import TemplateNotFound

from nore.errors import MailTransportError
from nore.modules.notifications import (
    EmailNotification,
    MailContent,
    MailData,
    MailGenerator,
    SMTPEmailNotification,
    SMTPTransport,
)

GENERATOR = {"product": {"name": "Nore", "link": "https://nore.example.com"}}

WELCOME = {
    "name": "Ada",
    "intro": "Welcome to <Nore>!",
    "dictionary": {"plan": "free"},
    "table": {"data": [{"item": "seat", "price": "$0"}]},
    "action": [{
        "instructions": "Confirm your account:",
        "button": {"text": "Confirm", "link": "https://nore.example.com/confirm"},
    }],
    "outro": ["Need help? Reply to this email."],
}


class RecordingNotification(EmailNotification):
    """Keeps sent mails in memory."""

    def init_transport(self) -> None:
        self.transport = []

    async def send_mail(self, mail_data: MailData):
        self.transport.append(mail_data)
        return len(self.transport)


class TestMailGenerator:
    """Rendering."""

    def test_html_contains_content(self):
        html = MailGenerator(GENERATOR).generate(WELCOME)

        assert "Hi Ada," in html
        assert "Welcome to &lt;Nore&gt;!" in html
        assert 'href="https://nore.example.com/confirm"' in html
        assert "<td>$0</td>" in html
        assert "Nore. All rights reserved." in html

    def test_plaintext_contains_content(self):
        text = MailGenerator(GENERATOR).generate_plaintext(WELCOME)

        assert text.startswith("Hi Ada,")
        assert "Welcome to <Nore>!" in text
        assert "plan: free" in text
        assert "seat | $0" in text
        assert "https://nore.example.com/confirm" in text
        assert "Yours truly," in text

    def test_title_replaces_greeting(self):
        text = MailGenerator(GENERATOR).generate_plaintext(MailContent(title="Your receipt"))
        assert text.startswith("Your receipt")

    def test_custom_copyright(self):
        generator = MailGenerator({"product": {"name": "Nore", "link": "https://x", "copyright": "(c) Nore"}})
        assert "(c) Nore" in generator.generate({})

    def test_unknown_theme(self):
        with pytest.raises(TemplateNotFound):
            MailGenerator({**GENERATOR, "theme": "salted"})


class TestEmailNotification:
    """Base notifier behaviour."""

    def test_init_transport_is_called(self):
        assert RecordingNotification(generator=GENERATOR).transport == []

    def test_mail_builds_text_and_html(self):
        body = RecordingNotification(generator=GENERATOR).mail(WELCOME)

        assert "Hi Ada," in body.text
        assert "<html" in body.html

    def test_send_named_email(self):
        notifier = RecordingNotification(generator=GENERATOR)
        notifier.emails["welcome"] = lambda to: MailData(to=to, subject="Welcome", content=WELCOME)

        assert asyncio.run(notifier.send("welcome", "ada@example.com")) == 1
        assert notifier.transport[0].recipients == ["ada@example.com"]

    def test_send_named_email_with_async_builder(self):
        notifier = RecordingNotification(generator=GENERATOR)

        async def reset(to):
            return MailData(to=[to], subject="Reset", text="Reset your password")

        notifier.emails["reset"] = reset
        asyncio.run(notifier.send("reset", "ada@example.com"))

        assert notifier.transport[0].subject == "Reset"

    def test_send_unknown_email(self):
        notifier = RecordingNotification(generator=GENERATOR)
        with pytest.raises(KeyError):
            asyncio.run(notifier.send("missing"))

    def test_explicit_bodies_win(self):
        notifier = RecordingNotification(generator=GENERATOR)
        body = notifier.render(MailData(to="a@b.c", subject="s", content=WELCOME, text="plain only"))

        assert body.text == "plain only"
        assert "Hi Ada," in body.html


class TestSMTPEmailNotification:
    """SMTP delivery."""

    def make_notifier(self, **transport) -> SMTPEmailNotification:
        return SMTPEmailNotification(
            generator=GENERATOR,
            transport=SMTPTransport(host="smtp.example.com", port=587, **transport),
            sender="noreply@example.com",
        )

    def test_build_message(self):
        message = self.make_notifier().build_message(
            MailData(to=["ada@example.com", "bob@example.com"], subject="Welcome", content=WELCOME)
        )

        assert message["Subject"] == "Welcome"
        assert message["From"] == "noreply@example.com"
        assert message["To"] == "ada@example.com, bob@example.com"
        assert message.is_multipart()
        assert message.get_body(("plain",)).get_content().startswith("Hi Ada,")
        assert "Hi Ada," in message.get_body(("html",)).get_content()

    def test_send_mail(self):
        notifier = self.make_notifier(username="user", password="pass", starttls=True)

        with patch("nore.modules.notifications.smtp.smtplib.SMTP") as smtp_class:
            message = asyncio.run(notifier.send_mail(MailData(to="ada@example.com", subject="Hi", text="hello")))

        smtp_class.assert_called_once_with("smtp.example.com", 587, timeout=30.0)
        smtp = smtp_class.return_value.__enter__.return_value
        smtp.starttls.assert_called_once()
        smtp.login.assert_called_once_with("user", "pass")
        smtp.send_message.assert_called_once_with(message)

    def test_send_mail_without_credentials_skips_login(self):
        with patch("nore.modules.notifications.smtp.smtplib.SMTP") as smtp_class:
            asyncio.run(self.make_notifier().send_mail(MailData(to="ada@example.com", subject="Hi", text="x")))

        smtp = smtp_class.return_value.__enter__.return_value
        smtp.starttls.assert_not_called()
        smtp.login.assert_not_called()

    def test_transport_failure(self):
        with patch("nore.modules.notifications.smtp.smtplib.SMTP") as smtp_class:
            smtp_class.return_value.__enter__.return_value.send_message.side_effect = smtplib.SMTPException("down")

            with pytest.raises(MailTransportError, match="down"):
                asyncio.run(self.make_notifier().send_mail(MailData(to="a@b.c", subject="s", text="x")))
