"""
Operation Pipeline - credit-gated remote operations on the selected document.

Each operation kind has its own small state machine:

    IDLE -> VALIDATING -> DEBITING -> IN_FLIGHT -> COMPLETED | FAILED -> IDLE
                     \\            \\-> REJECTED -> IDLE
                      \\-> IDLE  (nothing selected: silent, no log entry)

All kinds share one busy resource. It is held from the start of invoke()
until the operation is back in IDLE and released in a finally block.

Single-flight is cooperative: the pipeline itself does not refuse a second
invoke while busy. Callers (the HTTP layer) check `busy` and refuse.
"""

import json
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Set

from src.kernel.credits import PRICES, CreditLedger
from src.kernel.documents import Document, DocumentStore
from src.kernel.errors import RemoteCallError, ValidationError
from src.kernel.operation_log import OperationLog, OperationLogEntry
from src.kernel.transactions import TransactionHistory
from src.kernel.types import OperationKind, TransactionStatus
from src.logging_config import get_logger
from src.remote.base import RemoteCollaborator

logger = get_logger(__name__)


class PipelineState(str, Enum):
    """States of one operation kind."""
    IDLE = "idle"
    VALIDATING = "validating"
    DEBITING = "debiting"
    IN_FLIGHT = "in_flight"
    COMPLETED = "completed"
    REJECTED = "rejected"
    FAILED = "failed"


# Valid transitions: from_state -> allowed target states
_TRANSITIONS: Dict[PipelineState, Set[PipelineState]] = {
    PipelineState.IDLE: {PipelineState.VALIDATING},
    PipelineState.VALIDATING: {PipelineState.DEBITING, PipelineState.IDLE},
    PipelineState.DEBITING: {PipelineState.IN_FLIGHT, PipelineState.REJECTED},
    PipelineState.IN_FLIGHT: {PipelineState.COMPLETED, PipelineState.FAILED},
    PipelineState.COMPLETED: {PipelineState.IDLE},
    PipelineState.REJECTED: {PipelineState.IDLE},
    PipelineState.FAILED: {PipelineState.IDLE},
}


class InvalidTransitionError(ValueError):
    """A state change the transition table does not allow."""


def valid_transitions(from_state: PipelineState) -> List[PipelineState]:
    """Return the states reachable from the given one."""
    return sorted(_TRANSITIONS.get(from_state, set()), key=lambda s: s.value)


def can_transition(from_state: PipelineState, to_state: PipelineState) -> bool:
    return to_state in _TRANSITIONS.get(from_state, set())


@dataclass
class OperationOutcome:
    """How one invoke() ended."""

    kind: OperationKind
    state: PipelineState  # COMPLETED, REJECTED, FAILED, or IDLE when nothing was selected
    debited: int = 0
    response: Any = None
    entry: Optional[OperationLogEntry] = None
    document_id: Optional[str] = None

    @property
    def started(self) -> bool:
        """True if the remote call was made."""
        return self.state in (PipelineState.COMPLETED, PipelineState.FAILED)


def render_response(response: Any) -> str:
    """Log-line form of a collaborator response; text passes through as-is."""
    if isinstance(response, str):
        return response
    try:
        return json.dumps(response)
    except (TypeError, ValueError):
        return str(response)


class OperationPipeline:
    """
    Runs audit / compile / deploy / prove against the selected document.

    Side effects of one invoke are at most: one debit, one remote call, and
    the log entries describing the result.

    Usage:
        pipeline = OperationPipeline(documents, ledger, log, remote)
        outcome = await pipeline.invoke(OperationKind.COMPILE)
    """

    def __init__(
        self,
        documents: DocumentStore,
        ledger: CreditLedger,
        log: OperationLog,
        remote: RemoteCollaborator,
        transactions: Optional[TransactionHistory] = None,
        prices: Optional[Dict[OperationKind, int]] = None,
    ):
        self.documents = documents
        self.ledger = ledger
        self.log = log
        self.remote = remote
        self.transactions = transactions if transactions is not None else TransactionHistory()
        self.prices = dict(prices or PRICES)
        self._states: Dict[OperationKind, PipelineState] = {
            kind: PipelineState.IDLE for kind in OperationKind
        }
        self._in_flight: List[OperationKind] = []

    # ── Busy resource ────────────────────────────────────────────────────

    @property
    def busy(self) -> bool:
        return bool(self._in_flight)

    @property
    def pending(self) -> Optional[OperationKind]:
        """The operation holding the busy resource, if any."""
        return self._in_flight[0] if self._in_flight else None

    @contextmanager
    def _busy(self, kind: OperationKind) -> Iterator[None]:
        self._in_flight.append(kind)
        try:
            yield
        finally:
            self._in_flight.remove(kind)

    # ── State machine ────────────────────────────────────────────────────

    def state_of(self, kind: OperationKind) -> PipelineState:
        return self._states[kind]

    def _transition(self, kind: OperationKind, to_state: PipelineState) -> None:
        from_state = self._states[kind]
        if not can_transition(from_state, to_state):
            raise InvalidTransitionError(
                f"Invalid transition for {kind.value}: {from_state.value} -> {to_state.value}"
            )
        self._states[kind] = to_state

    # ── Operations ───────────────────────────────────────────────────────

    async def invoke(self, kind: OperationKind) -> OperationOutcome:
        """
        Run one metered operation.

        Never raises for business failures: a missing selection returns an
        IDLE outcome, insufficient credits a REJECTED one, and a remote
        error a FAILED one. Credits are not refunded on remote failure.

        Raises:
            InvalidTransitionError: the same kind is already running
        """
        kind = OperationKind(kind)
        self._transition(kind, PipelineState.VALIDATING)
        with self._busy(kind):
            try:
                return await self._run(kind)
            finally:
                self._states[kind] = PipelineState.IDLE

    def _selected_document(self) -> Document:
        doc = self.documents.selected
        if doc is None:
            raise ValidationError("No document selected")
        return doc

    async def _run(self, kind: OperationKind) -> OperationOutcome:
        try:
            doc = self._selected_document()
        except ValidationError as exc:
            logger.debug("%s skipped: %s", kind.label, exc)
            self._transition(kind, PipelineState.IDLE)
            return OperationOutcome(kind=kind, state=PipelineState.IDLE)

        price = self.prices[kind]
        self._transition(kind, PipelineState.DEBITING)
        if not self.ledger.try_debit(price):
            entry = self.log.append(
                f"Insufficient credits for {kind.value}: requires {price}, "
                f"balance is {self.ledger.balance}",
                source=kind.value,
                failed=True,
            )
            self._transition(kind, PipelineState.REJECTED)
            return OperationOutcome(
                kind=kind,
                state=PipelineState.REJECTED,
                entry=entry,
                document_id=doc.id,
            )

        # Snapshot before suspending; edits made while in flight are not sent
        code, manifest, document_id = doc.source, doc.manifest, doc.id
        self._transition(kind, PipelineState.IN_FLIGHT)
        tx = self.transactions.record_pending() if kind == OperationKind.DEPLOY else None

        try:
            response = await self.remote.run(kind, code, manifest)
        except RemoteCallError as exc:
            return self._fail(kind, price, document_id, str(exc), tx)
        except Exception as exc:
            logger.exception("%s raised an unexpected error", kind.label)
            return self._fail(kind, price, document_id, f"{type(exc).__name__}: {exc}", tx)

        if tx is not None:
            self.transactions.mark(tx.hash, TransactionStatus.SUCCESS)
        entry = self.log.append(
            f"{kind.label} result: {render_response(response)}",
            source=kind.value,
        )
        self._transition(kind, PipelineState.COMPLETED)
        return OperationOutcome(
            kind=kind,
            state=PipelineState.COMPLETED,
            debited=price,
            response=response,
            entry=entry,
            document_id=document_id,
        )

    def _fail(self, kind, price, document_id, detail, tx) -> OperationOutcome:
        if tx is not None:
            self.transactions.mark(tx.hash, TransactionStatus.FAILED)
        entry = self.log.append(
            f"{kind.label} failed: {detail}",
            source=kind.value,
            failed=True,
        )
        self._transition(kind, PipelineState.FAILED)
        return OperationOutcome(
            kind=kind,
            state=PipelineState.FAILED,
            debited=price,
            entry=entry,
            document_id=document_id,
        )

    async def audit(self) -> OperationOutcome:
        return await self.invoke(OperationKind.AUDIT)

    async def compile(self) -> OperationOutcome:
        return await self.invoke(OperationKind.COMPILE)

    async def deploy(self) -> OperationOutcome:
        return await self.invoke(OperationKind.DEPLOY)

    async def prove(self) -> OperationOutcome:
        return await self.invoke(OperationKind.PROVE)
