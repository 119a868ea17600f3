"""starts_with rule — value, or each item of value, starts with a pattern."""

from typing import Any

from nore.request.validation.models import FieldValidationOptions, Rule


def starts_with(pattern: str) -> Rule:
    """Check that the value or every item of the value starts with `pattern`."""

    def message(value: Any, options: FieldValidationOptions, data: dict) -> str:
        if isinstance(value, (list, tuple)):
            return f"Each item of `{options.name}` must start with `{pattern}`"
        return f"The field `{options.name}` value must start with `{pattern}`"

    def check(value: Any, options: FieldValidationOptions, data: dict) -> bool:
        if isinstance(value, (list, tuple)):
            return all(isinstance(item, str) and item.startswith(pattern) for item in value)
        return isinstance(value, str) and value.startswith(pattern)

    return Rule(validator=check, message=message)
