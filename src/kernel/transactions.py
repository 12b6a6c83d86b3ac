"""
Deploy transaction history.
"""

import secrets
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel

from src.kernel.types import TransactionStatus


def generate_transaction_hash() -> str:
    """Local tracking id in transaction-hash shape (0x + 64 hex chars)."""
    return "0x" + secrets.token_hex(32)


class Transaction(BaseModel):
    """A deploy attempt that reached the remote deployer."""

    hash: str
    timestamp: datetime
    status: TransactionStatus = TransactionStatus.PENDING


class TransactionHistory:
    """Deploy transactions, newest first."""

    def __init__(self):
        self._transactions: List[Transaction] = []

    @property
    def transactions(self) -> List[Transaction]:
        return list(self._transactions)

    def __len__(self) -> int:
        return len(self._transactions)

    def get(self, tx_hash: str) -> Optional[Transaction]:
        for tx in self._transactions:
            if tx.hash == tx_hash:
                return tx
        return None

    def record_pending(self) -> Transaction:
        tx = Transaction(
            hash=generate_transaction_hash(),
            timestamp=datetime.now(timezone.utc),
        )
        self._transactions.insert(0, tx)
        return tx

    def mark(self, tx_hash: str, status: TransactionStatus) -> Optional[Transaction]:
        tx = self.get(tx_hash)
        if tx is not None:
            tx.status = status
        return tx
