"""
Assistant layer - the chat sub-session and the in-process OpenAI backend.
"""

from src.ai.assistant import OpenAIAssistant
from src.ai.chat_session import ChatMessage, ChatSession

__all__ = [
    "ChatMessage",
    "ChatSession",
    "OpenAIAssistant",
]
