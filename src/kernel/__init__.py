"""
Workspace kernel - in-memory stores owned by one editor session.

- Document Store (selection held as an id, resolved on every read)
- Account Registry (at most one active account)
- Credit Ledger and price table
- Append-only Operation Log and deploy transaction history
- Text buffer helpers for the editor
"""

from src.kernel.accounts import Account, AccountRegistry
from src.kernel.credits import PRICES, CreditLedger
from src.kernel.documents import Document, DocumentStore, EXAMPLE_CONTRACTS
from src.kernel.errors import (
    DocumentNotFoundError,
    DocumentNotSelectedError,
    InsufficientCreditsError,
    RemoteCallError,
    ValidationError,
    WorkspaceError,
)
from src.kernel.explorer import ExplorerLinks
from src.kernel.operation_log import OperationLog, OperationLogEntry
from src.kernel.text_buffer import TabInsertion, TextBuffer, insert_tab, line_numbers
from src.kernel.transactions import Transaction, TransactionHistory
from src.kernel.types import ChatRole, OperationKind, TransactionStatus

__all__ = [
    # Documents
    "Document",
    "DocumentStore",
    "EXAMPLE_CONTRACTS",
    # Accounts
    "Account",
    "AccountRegistry",
    "ExplorerLinks",
    # Credits
    "CreditLedger",
    "PRICES",
    # Log & transactions
    "OperationLog",
    "OperationLogEntry",
    "Transaction",
    "TransactionHistory",
    # Editor
    "TabInsertion",
    "TextBuffer",
    "insert_tab",
    "line_numbers",
    # Types
    "ChatRole",
    "OperationKind",
    "TransactionStatus",
    # Errors
    "WorkspaceError",
    "ValidationError",
    "InsufficientCreditsError",
    "RemoteCallError",
    "DocumentNotFoundError",
    "DocumentNotSelectedError",
]
