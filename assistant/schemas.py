"""Request schemas for the AI assistant."""

from typing import List, Literal
from pydantic import BaseModel, Field


class AskBody(BaseModel):
    question: str = Field(..., min_length=1)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class ChatBody(BaseModel):
    messages: List[ChatMessage] = Field(..., min_length=1)
