"""
Shared workspace types - breaks circular imports between the ledger,
the operation log and the pipeline.
"""

from enum import Enum


class OperationKind(str, Enum):
    """Metered remote operations."""
    AUDIT = "audit"
    COMPILE = "compile"
    DEPLOY = "deploy"
    PROVE = "prove"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ChatRole(str, Enum):
    """Author of a chat message."""
    USER = "user"
    ASSISTANT = "assistant"


class TransactionStatus(str, Enum):
    """Status of a deploy transaction."""
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"


# Log source tag for chat failures (the chat is not a metered operation)
CHAT_LOG_SOURCE = "chat"
