"""
Business logic for registration, login and the current-user profile.

Identity-service failures are returned as `{"error": message}` rather than
raised, so routes can choose the HTTP status per failure.
"""

import asyncio
import logging
from typing import Any, Dict, Optional
from supabase import AuthError

from shared.auth import AuthUser
from shared.constants import ROLE_USER
from shared.permissions import get_profile
from shared.supabase_client import get_supabase_client, get_supabase_auth_client, run_query
from .schemas import RegisterBody, LoginBody

logger = logging.getLogger(__name__)

REGISTRATION_FAILED = "Registration failed"
LOGIN_FAILED = "Login failed"


def _to_dict(obj: Any) -> Optional[Dict]:
    """Turn an auth SDK model (user/session) into plain JSON data."""
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj
    if hasattr(obj, "model_dump"):
        return obj.model_dump(mode="json")
    return dict(vars(obj))


class AccountService:
    """Service class for account operations backed by Supabase Auth."""

    def __init__(self):
        self.client = get_supabase_client()
        self.auth_client = get_supabase_auth_client()

    async def register(self, body: RegisterBody) -> Dict:
        """
        Sign up a new user and create their USER profile.

        If the profile row can't be created the freshly created auth user is
        deleted again so no account exists without a profile.

        Returns:
            {"data": {"user": {"id"}, "session"}} or {"error": message}
        """
        try:
            result = await asyncio.to_thread(self.auth_client.auth.sign_up, {
                "email": body.email,
                "password": body.password,
            })
        except AuthError as e:
            logger.info(f"Sign-up rejected for {body.email}: {e.message}")
            return {"error": e.message}

        user = getattr(result, "user", None)
        if user is None:
            return {"error": REGISTRATION_FAILED}

        user_id = str(user.id)

        try:
            await run_query(self.client.table("profiles").insert({
                "id": user_id,
                "full_name": body.full_name,
                "role": ROLE_USER,
            }))
        except Exception as e:
            logger.error(f"Profile creation failed for {user_id}: {str(e)}")
            try:
                await asyncio.to_thread(self.client.auth.admin.delete_user, user_id)
            except Exception as cleanup_error:
                logger.warning(f"Could not remove orphaned auth user {user_id}: {str(cleanup_error)}")
            return {"error": REGISTRATION_FAILED}

        logger.info(f"Registered user {user_id}")
        return {"data": {"user": {"id": user_id}, "session": _to_dict(getattr(result, "session", None))}}

    async def login(self, body: LoginBody) -> Dict:
        """
        Sign in with email and password.

        Returns:
            {"data": {"user", "session"}} or {"error": message}
        """
        try:
            result = await asyncio.to_thread(self.auth_client.auth.sign_in_with_password, {
                "email": body.email,
                "password": body.password,
            })
        except AuthError as e:
            logger.info(f"Login rejected for {body.email}: {e.message}")
            return {"error": e.message}

        user = getattr(result, "user", None)
        session = getattr(result, "session", None)
        if user is None or session is None:
            return {"error": LOGIN_FAILED}

        return {"data": {"user": _to_dict(user), "session": _to_dict(session)}}

    async def get_me(self, user: AuthUser) -> Dict:
        """Current user plus profile; users without a profile read as USER."""
        identity = {"id": user.id, "email": user.email}

        try:
            profile = await get_profile(user.id)
        except Exception as e:
            logger.warning(f"Profile lookup failed for {user.id}: {str(e)}")
            profile = None

        if not profile:
            return {"user": identity, "profile": {"role": ROLE_USER}}

        return {
            "user": identity,
            "profile": {
                "id": profile.get("id"),
                "full_name": profile.get("full_name"),
                "role": profile.get("role") or ROLE_USER,
            },
        }
