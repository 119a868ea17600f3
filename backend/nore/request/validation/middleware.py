"""Request validation middleware — applies a schema to one part of a request.

Usage:
    @router.post(
        "/users",
        dependencies=[Depends(validate_request("body", {
            "email": {"type": "string", "required": True, "rules": [starts_with("a")]},
        }))],
    )
    async def create_user(...): ...

On failure RequestValidationFailed is raised and the application answers 422
with the ValidationResult as body.
"""

import json
from typing import Awaitable, Callable, Optional, Union

import structlog
from fastapi import Request

from nore.errors import RequestValidationFailed
from nore.request.validation.models import DataOrigin, ValidateOptions
from nore.request.validation.validator import Validator, default_validator

logger = structlog.get_logger()

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def _flatten(multi_dict) -> dict:
    """Single values stay scalar, repeated keys become lists."""
    data: dict = {}
    for key in multi_dict.keys():
        values = multi_dict.getlist(key)
        data[key] = values[0] if len(values) == 1 else values
    return data


async def read_request_data(request: Request, origin: DataOrigin) -> dict:
    """Load the data bucket for `origin` from the request."""
    if origin == DataOrigin.QUERY:
        return _flatten(request.query_params)

    if origin == DataOrigin.PARAMS:
        return dict(request.path_params)

    content_type = request.headers.get("content-type", "").lower()
    if content_type.startswith(FORM_CONTENT_TYPES):
        form = await request.form()
        return _flatten(form)

    raw = await request.body()
    if not raw:
        return {}
    try:
        body = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return {}
    return body if isinstance(body, dict) else {}


def validate_request(
    origin: Union[DataOrigin, str],
    options: ValidateOptions,
    validator: Optional[Validator] = None,
) -> Callable[[Request], Awaitable[dict]]:
    """Build a FastAPI dependency validating `origin` against `options`.

    Args:
        origin: "query", "body" or "params"
        options: Validation schema
        validator: Validator to use instead of the module default

    Returns:
        Dependency returning the validated data bucket
    """
    origin = DataOrigin(origin)

    async def dependency(request: Request) -> dict:
        data = await read_request_data(request, origin)
        result = await (validator or default_validator).validate(data, origin, options)

        if result.passed:
            return data

        logger.info(
            "request_validation_failed",
            path=request.url.path,
            method=request.method,
            origin=origin.value,
            fields=[e.field for e in result.errors],
        )
        raise RequestValidationFailed(result)

    return dependency
