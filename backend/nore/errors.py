"""Exceptions raised by nore components and rendered by the app's handlers."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nore.request.validation.models import ValidationResult


class NoreError(Exception):
    """Base class for nore errors."""


class RequestValidationFailed(NoreError):
    """A request did not satisfy its validation schema. Rendered as HTTP 422."""

    def __init__(self, result: "ValidationResult"):
        super().__init__(result.message)
        self.result = result


class MailTransportError(NoreError):
    """The mail transport could not deliver a message."""
