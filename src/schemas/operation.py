"""
Operation, credit and log schemas.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class LogEntryResponse(BaseModel):
    """One operation log line."""

    sequence: int
    timestamp: datetime
    message: str
    source: Optional[str] = None
    failed: bool = False


class OperationResponse(BaseModel):
    """Outcome of one metered operation."""

    kind: str
    state: str
    started: bool
    debited: int
    balance: int
    document_id: Optional[str] = None
    response: Optional[Any] = None
    entry: Optional[LogEntryResponse] = None


class CreditsResponse(BaseModel):
    """Current balance and the price of each operation."""

    balance: int
    prices: Dict[str, int]
    affordable: Dict[str, bool]


class PipelineStatusResponse(BaseModel):
    """Busy flag and per-kind states."""

    busy: bool
    pending: Optional[str] = None
    states: Dict[str, str]


class LogResponse(BaseModel):
    """Log entries from a given sequence number on."""

    entries: List[LogEntryResponse]
    next_sequence: int
