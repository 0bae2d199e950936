"""
Standard HTTP response helpers for the `{ data }` / `{ error }` envelope.
"""

import json
from typing import Any, Optional, Dict
import azure.functions as func


def json_serialize(obj: Any) -> str:
    """
    Serialize object to JSON, handling datetime and UUID types.
    """
    import datetime
    import uuid

    def default_serializer(o):
        if isinstance(o, (datetime.datetime, datetime.date)):
            return o.isoformat()
        if isinstance(o, uuid.UUID):
            return str(o)
        raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")

    return json.dumps(obj, default=default_serializer)


def _json_response(
    body: Dict[str, Any],
    status_code: int,
    headers: Optional[Dict[str, str]] = None
) -> func.HttpResponse:
    response_headers = {
        "Content-Type": "application/json",
        **(headers or {})
    }

    return func.HttpResponse(
        json_serialize(body),
        status_code=status_code,
        mimetype="application/json",
        headers=response_headers
    )


def success_response(
    data: Any,
    status_code: int = 200,
    headers: Optional[Dict[str, str]] = None
) -> func.HttpResponse:
    """
    Create a successful JSON response wrapped as `{"data": ...}`.

    Args:
        data: Response data to serialize
        status_code: HTTP status code (default: 200)
        headers: Optional additional headers

    Returns:
        Azure Functions HttpResponse
    """
    return _json_response({"data": data}, status_code, headers)


def created_response(
    data: Any,
    headers: Optional[Dict[str, str]] = None
) -> func.HttpResponse:
    """Create a 201 Created response."""
    return success_response(data, status_code=201, headers=headers)


def error_response(
    message: str,
    status_code: int = 400,
    code: Optional[str] = None,
    headers: Optional[Dict[str, str]] = None
) -> func.HttpResponse:
    """
    Create an error JSON response shaped as `{"error": {"message", "code"}}`.

    Args:
        message: Error message
        status_code: HTTP status code (default: 400)
        code: Optional machine-readable error code
        headers: Optional additional headers

    Returns:
        Azure Functions HttpResponse with error details
    """
    error_body: Dict[str, Any] = {"message": message}

    if code:
        error_body["code"] = code

    return _json_response({"error": error_body}, status_code, headers)

