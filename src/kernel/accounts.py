"""
Account Registry - key identities with a single active account.
"""

import secrets
from typing import List, Optional

from pydantic import BaseModel

from src.logging_config import get_logger

logger = get_logger(__name__)


def generate_public_key() -> str:
    """0x-prefixed, 40 hex chars. Shaped like a key, not derived from one."""
    return "0x" + secrets.token_hex(20)


class Account(BaseModel):
    """A key identity known to the workspace."""

    public_key: str
    is_active: bool = False


class AccountRegistry:
    """
    Ordered set of accounts.

    Invariant: at most one account has is_active=True. set_active() rewrites
    every flag in one pass, with no suspension point, so the invariant holds
    between any two calls.
    """

    def __init__(self):
        self._accounts: List[Account] = []

    @property
    def accounts(self) -> List[Account]:
        return list(self._accounts)

    def __len__(self) -> int:
        return len(self._accounts)

    @property
    def active(self) -> Optional[Account]:
        for account in self._accounts:
            if account.is_active:
                return account
        return None

    def get(self, public_key: str) -> Optional[Account]:
        for account in self._accounts:
            if account.public_key == public_key:
                return account
        return None

    def create(self) -> Account:
        """Append a new inactive account."""
        account = Account(public_key=generate_public_key(), is_active=False)
        self._accounts.append(account)
        return account

    def set_active(self, public_key: str) -> Optional[Account]:
        """
        Make the matching account the only active one.

        With no match every account ends up inactive and None is returned.
        """
        match: Optional[Account] = None
        for account in self._accounts:
            account.is_active = account.public_key == public_key
            if account.is_active:
                match = account
        if match is None:
            logger.warning(
                "No account matches public key; no account is active",
                extra={"public_key": public_key},
            )
        return match
