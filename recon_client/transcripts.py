"""
Per-user chat transcript cache with time-based expiry.

The assistant endpoints are stateless, so the caller keeps the transcript
and resends it with every /ai/chat request. Transcripts older than the TTL
are dropped when loaded.
"""

import json
import logging
import time
from pathlib import Path
from typing import Callable, Dict, List, Union

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 24 * 60 * 60


class TranscriptCache:
    """Stores one transcript file per user under `directory`."""

    def __init__(
        self,
        directory: Union[str, Path],
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time
    ):
        self.directory = Path(directory)
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def _path(self, user_id: str) -> Path:
        safe = "".join(ch for ch in user_id if ch.isalnum() or ch in "-_") or "anonymous"
        return self.directory / f"chat_{safe}.json"

    def load(self, user_id: str) -> List[Dict[str, str]]:
        """The user's transcript, or [] if missing or expired."""
        path = self._path(user_id)
        if not path.exists():
            return []

        try:
            with open(path, "r", encoding="utf-8") as f:
                entry = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Discarding unreadable transcript {path}: {e}")
            return []

        saved_at = entry.get("saved_at", 0)
        if self._clock() - saved_at > self.ttl_seconds:
            logger.info(f"Transcript for {user_id} expired")
            self.clear(user_id)
            return []

        return list(entry.get("messages") or [])

    def save(self, user_id: str, messages: List[Dict[str, str]]) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        with open(self._path(user_id), "w", encoding="utf-8") as f:
            json.dump({"saved_at": self._clock(), "messages": messages}, f)

    def append(self, user_id: str, *messages: Dict[str, str]) -> List[Dict[str, str]]:
        """Add messages to the transcript and return the updated list."""
        transcript = self.load(user_id) + list(messages)
        self.save(user_id, transcript)
        return transcript

    def clear(self, user_id: str) -> None:
        path = self._path(user_id)
        if path.exists():
            path.unlink()
