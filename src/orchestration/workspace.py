"""
Workspace sessions - one client's documents, accounts, credits, log and chat.

All state is in memory and lives as long as the process (or until the
session is discarded). Nothing is persisted.
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Optional

from src.ai.chat_session import ChatSession
from src.kernel.accounts import AccountRegistry
from src.kernel.credits import CreditLedger
from src.kernel.documents import DocumentStore
from src.kernel.explorer import ExplorerLinks
from src.kernel.operation_log import OperationLog
from src.kernel.transactions import TransactionHistory
from src.logging_config import get_logger
from src.orchestration.pipeline import OperationPipeline
from src.remote.base import RemoteCollaborator

logger = get_logger(__name__)


@dataclass
class WorkspaceSession:
    """Everything one editor session owns, wired to a single operation log."""

    id: str
    documents: DocumentStore
    accounts: AccountRegistry
    ledger: CreditLedger
    log: OperationLog
    transactions: TransactionHistory
    pipeline: OperationPipeline
    chat: ChatSession
    explorer: ExplorerLinks = field(default_factory=ExplorerLinks)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        remote: RemoteCollaborator,
        starting_credits: int,
        explorer: Optional[ExplorerLinks] = None,
        session_id: Optional[str] = None,
    ) -> "WorkspaceSession":
        """New session with the starter contract selected and one active account."""
        documents = DocumentStore.with_default()
        accounts = AccountRegistry()
        accounts.set_active(accounts.create().public_key)
        ledger = CreditLedger(starting_credits)
        log = OperationLog()
        transactions = TransactionHistory()
        return cls(
            id=session_id or str(uuid.uuid4()),
            documents=documents,
            accounts=accounts,
            ledger=ledger,
            log=log,
            transactions=transactions,
            pipeline=OperationPipeline(documents, ledger, log, remote, transactions),
            chat=ChatSession(remote, log),
            explorer=explorer or ExplorerLinks(),
        )


class SessionRegistry:
    """In-memory store of workspace sessions keyed by id."""

    def __init__(
        self,
        remote: RemoteCollaborator,
        starting_credits: int,
        explorer: Optional[ExplorerLinks] = None,
    ):
        self.remote = remote
        self.starting_credits = starting_credits
        self.explorer = explorer or ExplorerLinks()
        self._sessions: Dict[str, WorkspaceSession] = {}

    def create(self) -> WorkspaceSession:
        session = WorkspaceSession.create(
            self.remote,
            self.starting_credits,
            explorer=self.explorer,
        )
        self._sessions[session.id] = session
        logger.info("Workspace created", extra={"workspace": session.id})
        return session

    def get(self, session_id: str) -> Optional[WorkspaceSession]:
        return self._sessions.get(session_id)

    def discard(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)
