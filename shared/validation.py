"""
Request validation with pydantic schemas.

Each helper validates one part of the request (JSON body, query string,
route parameters) and raises RequestValidationError with a single
aggregated message such as "email: value is not a valid email address;
password: String should have at least 6 characters".
"""

import uuid
from typing import Any, Dict, List, Optional, Type, TypeVar
import azure.functions as func
from pydantic import BaseModel, ValidationError, field_validator

from .permissions import RequestValidationError

T = TypeVar("T", bound=BaseModel)


class IdParams(BaseModel):
    """Route parameters for /{id} routes."""
    id: uuid.UUID


class PartialUpdate(BaseModel):
    """Base for update bodies: fields may be left out but never sent as null."""

    @field_validator("*", mode="before")
    @classmethod
    def reject_null(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("must not be null")
        return value


def format_validation_errors(exc: ValidationError) -> str:
    """Collapse pydantic errors into "field: msg, msg; other: msg"."""
    grouped: Dict[str, List[str]] = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err.get("loc", ())) or "body"
        grouped.setdefault(field, []).append(err.get("msg", "Invalid value"))

    message = "; ".join(f"{field}: {', '.join(msgs)}" for field, msgs in grouped.items())
    return message or str(exc)


def validate(schema: Type[T], data: Any) -> T:
    """Validate raw data against a schema, raising RequestValidationError."""
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(format_validation_errors(e))


def parse_body(req: func.HttpRequest, schema: Type[T]) -> T:
    """Parse and validate the JSON request body."""
    try:
        body = req.get_json()
    except ValueError:
        raise RequestValidationError("Invalid JSON body")

    if not isinstance(body, dict):
        raise RequestValidationError("Request body must be a JSON object")

    return validate(schema, body)


def parse_query(req: func.HttpRequest, schema: Type[T]) -> T:
    """Validate query string parameters."""
    return validate(schema, dict(req.params))


def parse_route(req: func.HttpRequest, schema: Type[T] = IdParams) -> T:
    """Validate route parameters (defaults to a UUID `id`)."""
    return validate(schema, dict(req.route_params))


def parse_id(req: func.HttpRequest) -> str:
    """Return the validated UUID `id` route parameter as a string."""
    return str(parse_route(req, IdParams).id)


def split_list_param(value: Optional[str]) -> List[str]:
    """Turn "NEW,CONTACTED" (or a single value) into a list, dropping blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
