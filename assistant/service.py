"""
Business logic for the FAQ / chat assistant.

Both operations are stateless: the system prompt is prepended and the
conversation is forwarded as-is. Transcripts live on the client.
"""

import logging
from datetime import datetime, timezone
from typing import Dict, List
from shared.ai_client import get_ai_client
from .prompts import build_system_prompt

logger = logging.getLogger(__name__)

ASK_FALLBACK = "I apologize, but I couldn't generate a response. Could you rephrase your question?"
CHAT_FALLBACK = "I apologize, but I couldn't generate a response. Could you try asking in a different way?"

ASK_PARAMS = {"temperature": 0.8, "max_tokens": 600, "top_p": 0.9}
CHAT_PARAMS = {**ASK_PARAMS, "frequency_penalty": 0.3, "presence_penalty": 0.2}


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


class AssistantService:
    """Service class for single-turn questions and multi-turn chat."""

    def __init__(self):
        self.client = get_ai_client()

    async def ask(self, question: str) -> Dict:
        """Answer one question. Returns {question, answer, timestamp}."""
        messages = [
            {"role": "system", "content": build_system_prompt(question)},
            {"role": "user", "content": question},
        ]

        answer = await self.client.complete(messages, **ASK_PARAMS)

        return {
            "question": question,
            "answer": answer or ASK_FALLBACK,
            "timestamp": _utc_now(),
        }

    async def chat(self, messages: List[Dict[str, str]]) -> Dict:
        """Continue a conversation. Returns {response, timestamp}."""
        latest_user_text = next(
            (m["content"] for m in reversed(messages) if m.get("role") == "user"), ""
        )

        conversation = [{"role": "system", "content": build_system_prompt(latest_user_text)}, *messages]

        reply = await self.client.complete(conversation, **CHAT_PARAMS)

        return {
            "response": reply or CHAT_FALLBACK,
            "timestamp": _utc_now(),
        }
