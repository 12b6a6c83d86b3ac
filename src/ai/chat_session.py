"""
Chat Session - append-only conversation with the Move assistant.

One question may be in flight at a time. The user turn is appended as soon
as a question is accepted; the assistant turn follows when the backend
answers. Because nothing else can be accepted in between, replies can never
be reordered.
"""

from datetime import datetime, timezone
from typing import List, Optional, Protocol

from pydantic import BaseModel, Field

from src.kernel.operation_log import OperationLog
from src.kernel.types import CHAT_LOG_SOURCE, ChatRole
from src.logging_config import get_logger

logger = get_logger(__name__)


class ChatBackend(Protocol):
    async def chat(self, question: str) -> str: ...


class ChatMessage(BaseModel):
    """A single chat turn."""

    role: ChatRole
    content: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ChatSession:
    """
    Conversation state for one workspace.

    Failures are not raised to the caller; they are written to the shared
    operation log when one is attached.
    """

    def __init__(self, backend: ChatBackend, log: Optional[OperationLog] = None):
        self._backend = backend
        self._log = log
        self._messages: List[ChatMessage] = []
        self._thinking = False

    @property
    def messages(self) -> List[ChatMessage]:
        return list(self._messages)

    @property
    def thinking(self) -> bool:
        return self._thinking

    def can_ask(self, question: str) -> bool:
        return bool(question and question.strip()) and not self._thinking

    async def ask(self, question: str) -> Optional[ChatMessage]:
        """
        Send a question and wait for the reply.

        Returns the assistant message, or None when the question was not
        accepted (blank, or another one in flight) or the backend failed.
        """
        if not self.can_ask(question):
            return None

        self._messages.append(ChatMessage(role=ChatRole.USER, content=question))
        self._thinking = True
        try:
            answer = await self._backend.chat(question)
        except Exception as exc:
            logger.warning("Chat request failed: %s", exc)
            if self._log is not None:
                self._log.append(
                    f"Chat failed: {exc}",
                    source=CHAT_LOG_SOURCE,
                    failed=True,
                )
            return None
        else:
            reply = ChatMessage(role=ChatRole.ASSISTANT, content=str(answer))
            self._messages.append(reply)
            return reply
        finally:
            self._thinking = False
