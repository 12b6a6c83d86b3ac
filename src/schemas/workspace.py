"""
Workspace schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class WorkspaceResponse(BaseModel):
    """Summary of a workspace session."""

    id: str
    created_at: datetime
    balance: int
    selected_id: Optional[str] = None
    document_count: int
    account_count: int
    active_account: Optional[str] = None
    busy: bool
    pending: Optional[str] = None
    thinking: bool
    log_length: int
