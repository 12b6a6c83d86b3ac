"""
Common schema types used across the API.
"""

from typing import Dict, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error body returned by HTTPException and the global handlers."""

    detail: str
    type: Optional[str] = None
    request_id: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    workspaces: int = 0
    collaborators: Dict[str, bool] = {}
    assistant_configured: bool = False
