"""
Request pipeline shared by every HTTP route.

`api_handler` wraps a handler `(req, ctx)` into the `(req)` signature the
Functions host binds, and takes care of request ids, rate limiting, CORS
headers, error mapping and the per-request log line.
"""

import time
import uuid
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional
import azure.functions as func

from .config import load_settings
from .permissions import ApiError
from .rate_limit import GENERAL, check_rate_limit
from .responses import error_response

logger = logging.getLogger(__name__)

Handler = Callable[[func.HttpRequest, "RequestContext"], Awaitable[func.HttpResponse]]


@dataclass(frozen=True)
class RequestContext:
    """Per-request values handed explicitly to route handlers."""
    request_id: str
    client_ip: str


def get_request_id(req: func.HttpRequest) -> str:
    """Reuse the caller's X-Request-Id or mint a new one."""
    return req.headers.get("X-Request-Id") or str(uuid.uuid4())


def get_client_ip(req: func.HttpRequest) -> str:
    """Best-effort client address (first X-Forwarded-For hop)."""
    forwarded = req.headers.get("X-Forwarded-For", "")
    if forwarded:
        # Azure appends ":port" to the client address
        first = forwarded.split(",")[0].strip()
        if first.count(":") == 1:
            first = first.split(":")[0]
        if first:
            return first
    return req.headers.get("X-Client-IP") or "anonymous"


def _finalize(response: func.HttpResponse, ctx: RequestContext) -> func.HttpResponse:
    response.headers["X-Request-Id"] = ctx.request_id

    frontend_url = load_settings().frontend_url
    if frontend_url:
        response.headers["Access-Control-Allow-Origin"] = frontend_url
        response.headers["Vary"] = "Origin"

    return response


def api_handler(
    failure_message: str = "Something went wrong",
    rate_limit: Optional[str] = GENERAL
) -> Callable[[Handler], Callable[[func.HttpRequest], Awaitable[func.HttpResponse]]]:
    """
    Decorate a route handler with the shared request pipeline.

    Args:
        failure_message: Message returned with a 500 for unexpected errors
        rate_limit: Rate limit bucket name, or None to skip limiting

    Usage:
        @api_handler("Failed to list projects")
        async def list_projects(req, ctx):
            ...
    """
    def decorator(handler: Handler):
        async def wrapper(req: func.HttpRequest) -> func.HttpResponse:
            ctx = RequestContext(request_id=get_request_id(req), client_ip=get_client_ip(req))
            started = time.perf_counter()

            try:
                check_rate_limit(rate_limit, ctx.client_ip)
                response = await handler(req, ctx)
            except ApiError as e:
                response = error_response(e.message, e.status_code, e.code)
            except Exception as e:
                logger.error(f"[{ctx.request_id}] {failure_message}: {str(e)}", exc_info=True)
                response = error_response(failure_message, 500, "INTERNAL_ERROR")

            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(
                f"[{ctx.request_id}] {req.method} {req.url} -> "
                f"{response.status_code} ({elapsed_ms:.1f} ms)"
            )
            return _finalize(response, ctx)

        # The host derives the function name from __name__ and binds the
        # trigger by the `req` parameter, so copy metadata without __wrapped__.
        wrapper.__name__ = handler.__name__
        wrapper.__qualname__ = handler.__qualname__
        wrapper.__doc__ = handler.__doc__
        wrapper.__module__ = handler.__module__
        return wrapper

    return decorator
