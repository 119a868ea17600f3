"""Mail content models — the structured input rendered by MailGenerator."""

from typing import Optional, Union

from pydantic import BaseModel, Field


class MailProduct(BaseModel):
    """Product shown in the mail header and footer."""

    name: str
    link: str
    logo: Optional[str] = None
    copyright: Optional[str] = None


class MailGeneratorOptions(BaseModel):
    theme: str = "default"
    product: MailProduct
    text_direction: str = "ltr"


class MailButton(BaseModel):
    text: str
    link: str
    color: str = "#22BC66"
    text_color: str = "#FFFFFF"


class MailAction(BaseModel):
    instructions: str
    button: MailButton


class MailTable(BaseModel):
    data: list[dict[str, str]] = Field(default_factory=list)
    columns: Optional[list[str]] = None

    @property
    def headers(self) -> list[str]:
        if self.columns:
            return self.columns
        return list(self.data[0].keys()) if self.data else []


class MailContent(BaseModel):
    """Body of a mail: greeting, intro, key-value pairs, table, actions, outro."""

    name: Optional[str] = None
    title: Optional[str] = None
    greeting: str = "Hi"
    signature: str = "Yours truly"
    intro: Union[str, list[str]] = Field(default_factory=list)
    dictionary: dict[str, str] = Field(default_factory=dict)
    table: Optional[MailTable] = None
    action: list[MailAction] = Field(default_factory=list)
    outro: Union[str, list[str]] = Field(default_factory=list)

    @property
    def intro_lines(self) -> list[str]:
        return [self.intro] if isinstance(self.intro, str) else self.intro

    @property
    def outro_lines(self) -> list[str]:
        return [self.outro] if isinstance(self.outro, str) else self.outro

    @property
    def heading(self) -> str:
        if self.title:
            return self.title
        return f"{self.greeting} {self.name}," if self.name else f"{self.greeting},"


class MailBody(BaseModel):
    text: str
    html: str


class MailData(BaseModel):
    """A message ready for a transport."""

    to: Union[str, list[str]]
    subject: str
    content: Optional[MailContent] = None
    text: Optional[str] = None
    html: Optional[str] = None
    sender: Optional[str] = None

    @property
    def recipients(self) -> list[str]:
        return [self.to] if isinstance(self.to, str) else self.to
