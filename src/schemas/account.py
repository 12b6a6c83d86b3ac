"""
Account and transaction schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class AccountResponse(BaseModel):
    """Account with its explorer link."""

    public_key: str
    is_active: bool
    explorer_url: str


class ActivateResponse(BaseModel):
    """Result of activating an account; account is None when the key matched nothing."""

    active: Optional[AccountResponse] = None


class TransactionResponse(BaseModel):
    """Deploy transaction with its explorer link."""

    hash: str
    timestamp: datetime
    status: str
    explorer_url: str
