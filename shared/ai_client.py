"""
Chat completion client for the hosted LLM (Groq, OpenAI-compatible API).

The backend is the only caller - the frontend never talks to the LLM
provider directly, so the API key stays server side.
"""

import logging
import aiohttp
from typing import Dict, List, Optional

from .config import load_settings

logger = logging.getLogger(__name__)


class AIServiceError(Exception):
    """Raised when the completion API returns an error."""
    pass


class CompletionClient:
    """
    HTTP client for the chat completion endpoint.

    All methods are async for non-blocking operation.
    """

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None, model: Optional[str] = None):
        settings = load_settings()
        self.api_key = api_key or settings.groq_api_key
        self.base_url = (base_url or settings.groq_base_url).rstrip("/")
        self.model = model or settings.groq_model

        if not self.api_key:
            raise ValueError("GROQ_API_KEY environment variable not set")

    async def complete(self, messages: List[Dict[str, str]], **params) -> Optional[str]:
        """
        Run one chat completion.

        Args:
            messages: Conversation in OpenAI message format (role/content)
            **params: Sampling parameters (temperature, max_tokens, top_p, ...)

        Returns:
            Content of the first choice, or None if the model returned nothing

        Raises:
            AIServiceError: If the API responds with a non-200 status
        """
        url = f"{self.base_url}/chat/completions"

        payload = {
            "model": self.model,
            "messages": messages,
            **params
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        logger.info(f"Requesting completion ({len(messages)} messages, model={self.model})")

        async with aiohttp.ClientSession() as session:
            timeout = aiohttp.ClientTimeout(total=60)

            async with session.post(url, json=payload, headers=headers, timeout=timeout) as response:
                if response.status != 200:
                    error_text = await response.text()
                    logger.error(f"Completion failed ({response.status}): {error_text[:500]}")
                    raise AIServiceError(f"Completion failed with status {response.status}")

                result = await response.json()

        choices = result.get("choices") or []
        if not choices:
            return None

        return (choices[0].get("message") or {}).get("content")


# Singleton instance
_ai_client: Optional[CompletionClient] = None


def get_ai_client() -> CompletionClient:
    """Get the completion client singleton."""
    global _ai_client
    if _ai_client is None:
        _ai_client = CompletionClient()
    return _ai_client
