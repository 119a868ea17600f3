"""Request field validation.

Usage:
    from nore.request.validation import validate, validate_request

    result = await validate(data, "query", {"page": {"type": "int"}})
    router.get("/items", dependencies=[Depends(validate_request("query", schema))])
"""

from nore.request.validation.models import (
    DataOrigin,
    FieldType,
    FieldValidationOptions,
    Rule,
    ValidateOptions,
    ValidationError,
    ValidationResult,
)
from nore.request.validation.validator import Validator, default_validator, validate, is_filled
from nore.request.validation.middleware import validate_request, read_request_data

__all__ = [
    "DataOrigin",
    "FieldType",
    "FieldValidationOptions",
    "Rule",
    "ValidateOptions",
    "ValidationError",
    "ValidationResult",
    "Validator",
    "default_validator",
    "validate",
    "is_filled",
    "validate_request",
    "read_request_data",
]
