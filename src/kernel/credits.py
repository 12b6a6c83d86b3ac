"""
Credit Ledger - the metering balance gating paid operations.
"""

from typing import Dict

from src.kernel.errors import InsufficientCreditsError
from src.kernel.types import OperationKind

# Prices per operation, shared with the client
PRICES: Dict[OperationKind, int] = {
    OperationKind.AUDIT: 100,
    OperationKind.COMPILE: 50,
    OperationKind.DEPLOY: 200,
    OperationKind.PROVE: 100,
}


class CreditLedger:
    """
    A single non-negative balance.

    try_debit() checks and subtracts without awaiting anything in between,
    so on one event loop no interleaving of pipeline tasks can drive the
    balance below zero.
    """

    def __init__(self, starting_balance: int):
        if starting_balance < 0:
            raise ValueError("Starting balance must be non-negative")
        self._balance = starting_balance

    @property
    def balance(self) -> int:
        return self._balance

    def can_afford(self, amount: int) -> bool:
        return self._balance >= amount

    def try_debit(self, amount: int) -> bool:
        """Subtract amount if the balance covers it. The balance is untouched on failure."""
        if amount < 0:
            raise ValueError("Debit amount must be non-negative")
        if self._balance < amount:
            return False
        self._balance -= amount
        return True

    def debit(self, amount: int) -> int:
        """
        Subtract amount and return the new balance.

        Raises:
            InsufficientCreditsError: balance below amount (balance unchanged)
        """
        if not self.try_debit(amount):
            raise InsufficientCreditsError(self._balance, amount)
        return self._balance
