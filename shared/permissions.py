"""
API error types and role-based authorization checks.
"""

import logging
from typing import Dict, Iterable, Optional
from .supabase_client import get_supabase_client, run_query

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base class for errors that map directly onto an HTTP error response."""

    status_code = 500
    code: Optional[str] = None

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if code is not None:
            self.code = code


class RequestValidationError(ApiError):
    """Raised when a request body, query or route parameter is invalid."""
    status_code = 400
    code = "VALIDATION_ERROR"


class UnauthorizedError(ApiError):
    """Raised when authentication fails."""
    status_code = 401
    code = "UNAUTHORIZED"


class ForbiddenError(ApiError):
    """Raised when a user doesn't have permission to access a resource."""
    status_code = 403
    code = "FORBIDDEN"


class NotFoundError(ApiError):
    """Raised when a resource is not found."""
    status_code = 404
    code = "NOT_FOUND"


class RateLimitError(ApiError):
    """Raised when a client exceeds its request budget."""
    status_code = 429
    code = "RATE_LIMITED"


async def get_profile(user_id: str) -> Optional[Dict]:
    """
    Fetch a user's profile row.

    Args:
        user_id: The user's UUID

    Returns:
        Profile dict (id, full_name, role) or None if no profile exists
    """
    client = get_supabase_client()

    query = client.table("profiles") \
        .select("id, full_name, role") \
        .eq("id", user_id)
    result = await run_query(query)

    if not result.data:
        return None
    return result.data[0]


async def require_role(user, roles: Iterable[str]) -> str:
    """
    Check that the user's profile role is one of the allowed roles.

    Looks the profile up on every call; roles are never cached.

    Args:
        user: The authenticated user (AuthUser)
        roles: Roles allowed on the route

    Returns:
        The user's role

    Raises:
        ForbiddenError: If the profile is missing or the role isn't allowed
    """
    if user is None:
        raise ForbiddenError("Profile not found or access denied")

    try:
        profile = await get_profile(user.id)
    except Exception as e:
        logger.error(f"Error looking up profile for {user.id}: {str(e)}")
        raise ForbiddenError("Profile not found or access denied")

    if not profile:
        raise ForbiddenError("Profile not found or access denied")

    role = profile.get("role")
    if role not in set(roles):
        logger.info(f"User {user.id} with role {role} denied (needs one of {sorted(roles)})")
        raise ForbiddenError("Forbidden")

    return role
