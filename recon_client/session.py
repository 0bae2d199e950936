"""
Persisted sign-in session for API consumers.

The session returned by POST /auth/login is stored as JSON on disk,
together with the profile from GET /auth/me, so role guards can be
checked without another round trip.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

logger = logging.getLogger(__name__)


class SessionStore:
    """JSON-file backed session storage."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def load(self) -> Optional[Dict]:
        """The stored session, or None if absent or unreadable."""
        if not self.path.exists():
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Discarding unreadable session file {self.path}: {e}")
            return None
        return data if isinstance(data, dict) else None

    def save(self, session: Dict) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(session, f)

    def clear(self) -> None:
        if self.path.exists():
            self.path.unlink()

    @property
    def access_token(self) -> Optional[str]:
        session = self.load() or {}
        return (session.get("session") or {}).get("access_token")

    @property
    def role(self) -> Optional[str]:
        session = self.load() or {}
        return (session.get("profile") or {}).get("role")

    @property
    def user_id(self) -> Optional[str]:
        session = self.load() or {}
        return (session.get("user") or {}).get("id")

    def has_role(self, roles: Iterable[str]) -> bool:
        """Route guard: is the signed-in user's role one of `roles`?"""
        role = self.role
        return role is not None and role in set(roles)
