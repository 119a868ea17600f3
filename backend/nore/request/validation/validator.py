"""Field Validator — checks a request data bucket against a declarative schema.

Each schema field goes through three stages, in order:

    1. required  — the field must be filled when `required` is set
    2. type      — a present value must match the declared FieldType
    3. rules     — custom Rule predicates, all of them, in declared order

Every message produced for a field lands in a single ValidationError. The run
never stops early; only exceptions raised by rule callables escape.

Usage:
    result = await validate(data, "body", {
        "name": {"type": "string", "required": True},
        "age": {"type": ["int", "Age must be a number"]},
    })
    if not result.passed:
        ...
"""

import inspect
import math
import re
import time
from collections.abc import Mapping
from datetime import date, datetime, timezone
from typing import Any, Callable, Optional, Union

import structlog

from nore.config import get_settings
from nore.request.validation.models import (
    DataOrigin,
    FieldType,
    FieldValidationOptions,
    ValidateOptions,
    ValidationError,
    ValidationResult,
)

logger = structlog.get_logger()

# JavaScript-compatible date range, in milliseconds either side of the epoch
MAX_EPOCH_MS = 8.64e15

TYPE_CHECK_ERRORS = (TypeError, ValueError, OverflowError, OSError)

# ASCII digits only; int() and float() also take underscores and Unicode digits
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")


# ── Type checks ──
#
# Each check takes (value, origin, strict) and either returns a bool or raises
# one of TYPE_CHECK_ERRORS. Both a False return and a raise count as a mismatch.

def _check_string(value: Any, origin: DataOrigin, strict: bool) -> bool:
    return isinstance(value, str)


def _check_array(value: Any, origin: DataOrigin, strict: bool) -> bool:
    return isinstance(value, (list, tuple))


def _check_object(value: Any, origin: DataOrigin, strict: bool) -> bool:
    if strict:
        return isinstance(value, Mapping)
    return isinstance(value, (Mapping, list, tuple))


def _check_bool(value: Any, origin: DataOrigin, strict: bool) -> bool:
    if origin == DataOrigin.BODY:
        return isinstance(value, bool)

    # query and path values always arrive as strings
    if isinstance(value, str):
        return value.lower() in ("true", "false")
    return True


def _check_date(value: Any, origin: DataOrigin, strict: bool) -> bool:
    if isinstance(value, (date, datetime)):
        return True
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float)):
        if not math.isfinite(value) or abs(value) > MAX_EPOCH_MS:
            return False
        datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        return True
    if isinstance(value, str):
        datetime.fromisoformat(value.strip())
        return True
    return False


def _parse_float(value: Any) -> float:
    if isinstance(value, bool):
        raise TypeError("booleans are not numbers")
    if isinstance(value, str):
        value = value.strip()
        if not DECIMAL_PATTERN.fullmatch(value):
            raise ValueError(f"{value!r} is not a decimal number")
    number = float(value)
    if not math.isfinite(number):
        raise ValueError(f"{value!r} is not a finite number")
    return number


def _parse_int(value: Any) -> int:
    if isinstance(value, bool):
        raise TypeError("booleans are not numbers")
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value!r} is not an integer")
        return int(value)
    if isinstance(value, str):
        value = value.strip()
        if not INTEGER_PATTERN.fullmatch(value):
            raise ValueError(f"{value!r} is not an integer")
        return int(value, 10)
    raise TypeError(f"{type(value).__name__} is not an integer")


def _check_decimal(value: Any, origin: DataOrigin, strict: bool) -> bool:
    if strict:
        _parse_float(value)
    return True


def _check_integer(value: Any, origin: DataOrigin, strict: bool) -> bool:
    if strict:
        _parse_int(value)
    return True


TYPE_CHECKS: dict[FieldType, Callable[[Any, DataOrigin, bool], bool]] = {
    FieldType.STRING: _check_string,
    FieldType.ARRAY: _check_array,
    FieldType.OBJECT: _check_object,
    FieldType.BOOL: _check_bool,
    FieldType.DATE: _check_date,
    FieldType.DOUBLE: _check_decimal,
    FieldType.DECIMAL: _check_decimal,
    FieldType.INT: _check_integer,
    FieldType.LONG: _check_integer,
    FieldType.TIMESTAMP: _check_integer,
}


def is_filled(value: Any) -> bool:
    """A value is filled unless it is None, an empty string or an empty sequence."""
    if value is None:
        return False
    if isinstance(value, (str, list, tuple)):
        return len(value) != 0
    return True


async def _resolve(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


class Validator:
    """Runs a schema against a data bucket and produces a ValidationResult.

    Args:
        strict_types: When True, numeric types reject values that do not parse
            as numbers and `object` rejects sequences. When False, numeric
            checks always pass and `object` accepts sequences too. Defaults to
            the VALIDATION_STRICT_TYPES setting, read on every run.
    """

    def __init__(self, strict_types: Optional[bool] = None):
        self.strict_types = strict_types

    @property
    def strict(self) -> bool:
        if self.strict_types is None:
            return get_settings().VALIDATION_STRICT_TYPES
        return self.strict_types

    async def validate(
        self,
        data: Optional[Mapping],
        origin: Union[DataOrigin, str],
        options: ValidateOptions,
    ) -> ValidationResult:
        """Validate `data` (the bucket read from `origin`) against `options`.

        Args:
            data: Key-value data read from the request
            origin: "query", "body" or "params"
            options: Mapping of field name to FieldValidationOptions (or dict)

        Returns:
            ValidationResult with one ValidationError per failing field
        """
        start_time = time.perf_counter()
        origin = DataOrigin(origin)
        if not isinstance(data, Mapping):
            data = {}

        strict = self.strict
        errors: dict[str, ValidationError] = {}

        for field, raw_options in options.items():
            field_options = self._field_options(field, raw_options)
            messages = await self._validate_field(field, field_options, data, origin, strict)
            if messages:
                errors[field] = ValidationError(
                    origin=origin,
                    field=field,
                    type=field_options.field_type,
                    value=data.get(field),
                    message=messages,
                )

        result = ValidationResult.build(list(errors.values()))

        logger.debug(
            "validation_complete",
            origin=origin.value,
            fields=len(options),
            failed_fields=[e.field for e in result.errors],
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
        )

        return result

    @staticmethod
    def _field_options(field: str, raw: Union[FieldValidationOptions, dict]) -> FieldValidationOptions:
        if isinstance(raw, FieldValidationOptions):
            return raw.model_copy(update={"name": field})
        return FieldValidationOptions.model_validate({**raw, "name": field})

    async def _validate_field(
        self,
        field: str,
        options: FieldValidationOptions,
        data: Mapping,
        origin: DataOrigin,
        strict: bool,
    ) -> list[str]:
        """Return every message for one field: required, then type, then rules."""
        messages: list[str] = []
        value = data.get(field)
        field_type = options.field_type
        filled = is_filled(value)

        # 1. Required
        if options.is_required and not filled:
            if isinstance(options.required, str) and options.required:
                messages.append(options.required)
            else:
                messages.append(f"The field `{field}` is required")

        # 2. Type
        if filled:
            check = TYPE_CHECKS[field_type]
            try:
                valid = check(value, origin, strict)
            except TYPE_CHECK_ERRORS:
                valid = False
            if not valid:
                messages.append(
                    options.type_message
                    or f"The value of `{field}` must be a valid {field_type.value}"
                )

        # 3. Rules
        if options.is_required or filled:
            for rule in options.rules:
                if await _resolve(rule.validator(value, options, data)):
                    continue
                if rule.message is None:
                    messages.append(f"`{field}` value is not valid")
                elif isinstance(rule.message, str):
                    messages.append(rule.message)
                else:
                    messages.append(await _resolve(rule.message(value, options, data)))

        return messages


# Module-level singleton
default_validator = Validator()


async def validate(
    data: Optional[Mapping],
    origin: Union[DataOrigin, str],
    options: ValidateOptions,
) -> ValidationResult:
    """Validate with the default validator."""
    return await default_validator.validate(data, origin, options)
