"""
Bearer token authentication against Supabase Auth.

Tokens are issued and verified by Supabase; this module only forwards
them to the identity service and returns who they belong to.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Optional
import azure.functions as func

from .supabase_client import get_supabase_client
from .permissions import UnauthorizedError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthUser:
    """The identity behind an accepted bearer token."""
    id: str
    email: Optional[str] = None


def get_bearer_token(req: func.HttpRequest) -> Optional[str]:
    """Extract the bearer token from the Authorization header, if any."""
    auth_header = req.headers.get("Authorization", "")

    if not auth_header.startswith("Bearer "):
        return None

    token = auth_header[7:].strip()
    return token or None


async def _lookup_user(token: str) -> Optional[AuthUser]:
    """Ask Supabase who the token belongs to. Returns None if rejected."""
    client = get_supabase_client()

    try:
        result = await asyncio.to_thread(client.auth.get_user, token)
    except Exception as e:
        logger.warning(f"Token rejected by identity service: {str(e)}")
        return None

    user = getattr(result, "user", None) if result else None
    if user is None:
        return None

    return AuthUser(id=str(user.id), email=getattr(user, "email", None))


async def authenticate(req: func.HttpRequest) -> AuthUser:
    """
    Resolve the authenticated user for a request.

    Args:
        req: The HTTP request object

    Returns:
        AuthUser for the bearer token

    Raises:
        UnauthorizedError: If the token is missing or the identity service rejects it
    """
    token = get_bearer_token(req)
    if not token:
        raise UnauthorizedError("Unauthorized")

    user = await _lookup_user(token)
    if user is None:
        raise UnauthorizedError("Invalid token")

    return user


async def authenticate_optional(req: func.HttpRequest) -> Optional[AuthUser]:
    """Like authenticate(), but anonymous callers and bad tokens yield None."""
    token = get_bearer_token(req)
    if not token:
        return None
    return await _lookup_user(token)
