"""
Pydantic schemas for API request/response validation.
"""

from src.schemas.account import AccountResponse, ActivateResponse, TransactionResponse
from src.schemas.chat import ChatAskResponse, ChatHistoryResponse, ChatMessageOut, ChatQuestion
from src.schemas.common import ErrorResponse, HealthResponse
from src.schemas.document import (
    DocumentCreate,
    DocumentListItem,
    DocumentRename,
    DocumentResponse,
    ExampleContract,
    LinesResponse,
    ManifestUpdate,
    SelectionResponse,
    SourceUpdate,
    TabRequest,
    TabResponse,
)
from src.schemas.operation import (
    CreditsResponse,
    LogEntryResponse,
    LogResponse,
    OperationResponse,
    PipelineStatusResponse,
)
from src.schemas.workspace import WorkspaceResponse

__all__ = [
    # Common
    "ErrorResponse",
    "HealthResponse",
    # Workspace
    "WorkspaceResponse",
    # Documents
    "DocumentCreate",
    "DocumentRename",
    "DocumentResponse",
    "DocumentListItem",
    "SourceUpdate",
    "ManifestUpdate",
    "TabRequest",
    "TabResponse",
    "LinesResponse",
    "SelectionResponse",
    "ExampleContract",
    # Accounts
    "AccountResponse",
    "ActivateResponse",
    "TransactionResponse",
    # Operations
    "OperationResponse",
    "CreditsResponse",
    "PipelineStatusResponse",
    "LogEntryResponse",
    "LogResponse",
    # Chat
    "ChatQuestion",
    "ChatMessageOut",
    "ChatAskResponse",
    "ChatHistoryResponse",
]
