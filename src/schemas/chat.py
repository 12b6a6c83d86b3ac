"""
Chat schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ChatQuestion(BaseModel):
    """Question for the assistant. Blank questions are ignored, not rejected."""

    question: str = Field(..., max_length=4000)


class ChatMessageOut(BaseModel):
    """Single chat turn."""

    role: str
    content: str
    created_at: datetime


class ChatAskResponse(BaseModel):
    """Result of asking: accepted is False for blank questions."""

    accepted: bool
    reply: Optional[ChatMessageOut] = None
    thinking: bool = False


class ChatHistoryResponse(BaseModel):
    """All chat turns of a workspace, oldest first."""

    messages: List[ChatMessageOut]
    thinking: bool
