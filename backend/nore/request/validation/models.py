"""Validation models — field types, schema entries, rules, errors and results.

A schema maps field names to FieldValidationOptions. Running the validator over
a data bucket produces a ValidationResult holding at most one ValidationError
per field.
"""

from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class DataOrigin(str, Enum):
    """Part of the incoming request a field is read from."""

    QUERY = "query"
    BODY = "body"
    PARAMS = "params"


class FieldType(str, Enum):
    """Field types understood by the type check."""

    STRING = "string"
    OBJECT = "object"
    ARRAY = "array"
    BOOL = "bool"
    DATE = "date"
    TIMESTAMP = "timestamp"
    DOUBLE = "double"
    INT = "int"
    LONG = "long"
    DECIMAL = "decimal"


# Both are called with (value, field options, full data bucket)
RulePredicate = Callable[..., Union[bool, Awaitable[bool]]]
RuleMessage = Callable[..., Union[str, Awaitable[str]]]


class Rule(BaseModel):
    """A reusable custom check layered on top of the required and type checks.

    `validator` returns (or resolves to) a boolean. `message` is either a static
    string or a callable taking the same arguments as `validator`.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    validator: RulePredicate
    message: Optional[Union[str, RuleMessage]] = None


class FieldValidationOptions(BaseModel):
    """Schema entry for a single field."""

    model_config = ConfigDict(frozen=True)

    name: str = ""  # filled in by the validator from the schema key
    type: Union[FieldType, tuple[FieldType, str]]
    required: Union[bool, str] = False
    rules: list[Rule] = Field(default_factory=list)

    @property
    def field_type(self) -> FieldType:
        return self.type[0] if isinstance(self.type, tuple) else self.type

    @property
    def type_message(self) -> Optional[str]:
        """Custom type-error message, if the type was given as a pair."""
        return self.type[1] if isinstance(self.type, tuple) else None

    @property
    def is_required(self) -> bool:
        if isinstance(self.required, bool):
            return self.required
        return True


ValidateOptions = dict[str, Union[FieldValidationOptions, dict]]


class ValidationError(BaseModel):
    """All findings for one field."""

    origin: DataOrigin
    field: str
    type: FieldType
    value: Any = None
    message: list[str] = Field(default_factory=list)

    model_config = ConfigDict(use_enum_values=True)


class ValidationResult(BaseModel):
    """Outcome of a validation run. Empty `errors` means the data is valid."""

    message: Optional[str] = None
    errors: list[ValidationError] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return len(self.errors) == 0

    @classmethod
    def build(cls, errors: list[ValidationError]) -> "ValidationResult":
        """Build a result, joining every message into the summary."""
        return cls(
            message="; ".join("; ".join(error.message) for error in errors),
            errors=errors,
        )
