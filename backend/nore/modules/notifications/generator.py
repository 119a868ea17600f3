"""Mail generator — renders MailContent to HTML and plain text with Jinja2 themes."""

from datetime import datetime
from typing import Union

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from nore.modules.notifications.models import MailContent, MailGeneratorOptions


class MailGenerator:
    """Renders mails with the `<theme>.html` and `<theme>.txt` templates."""

    def __init__(self, options: Union[MailGeneratorOptions, dict]):
        self.options = MailGeneratorOptions.model_validate(options)
        self.env = Environment(
            loader=PackageLoader("nore.modules.notifications", "templates"),
            autoescape=select_autoescape(enabled_extensions=("html",), default_for_string=False),
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Fail at construction on an unknown theme
        self._html = self.env.get_template(f"{self.options.theme}.html")
        self._text = self.env.get_template(f"{self.options.theme}.txt")

    def _context(self, content: Union[MailContent, dict]) -> dict:
        product = self.options.product
        return {
            "content": MailContent.model_validate(content),
            "product": product,
            "copyright": product.copyright or f"© {datetime.now().year} {product.name}. All rights reserved.",
            "text_direction": self.options.text_direction,
        }

    def generate(self, content: Union[MailContent, dict]) -> str:
        """Render the HTML version."""
        return self._html.render(**self._context(content))

    def generate_plaintext(self, content: Union[MailContent, dict]) -> str:
        """Render the plain-text version."""
        return self._text.render(**self._context(content)).strip() + "\n"
