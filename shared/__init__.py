# Shared utilities for the RECON backend
from .auth import AuthUser, authenticate, authenticate_optional
from .supabase_client import get_supabase_client, get_supabase_auth_client
from .responses import success_response, created_response, error_response
from .permissions import (
    ApiError, RequestValidationError, UnauthorizedError, ForbiddenError,
    NotFoundError, RateLimitError, require_role,
)
from .middleware import RequestContext, api_handler

__all__ = [
    "AuthUser",
    "authenticate",
    "authenticate_optional",
    "get_supabase_client",
    "get_supabase_auth_client",
    "success_response",
    "created_response",
    "error_response",
    "ApiError",
    "RequestValidationError",
    "UnauthorizedError",
    "ForbiddenError",
    "NotFoundError",
    "RateLimitError",
    "require_role",
    "RequestContext",
    "api_handler",
]
