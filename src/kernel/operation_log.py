"""
Operation Log - append-only record of what the pipeline and chat did.

This is the only user-visible error surface for operations: rejections
and remote failures end up here as entries, never as exceptions.
"""

from datetime import datetime, timezone
from typing import List, Optional, Tuple

from pydantic import BaseModel, ConfigDict

from src.logging_config import get_logger

logger = get_logger(__name__)


class OperationLogEntry(BaseModel):
    """One immutable log line."""

    model_config = ConfigDict(frozen=True)

    sequence: int
    timestamp: datetime
    message: str
    source: Optional[str] = None  # operation kind value or "chat"
    failed: bool = False


class OperationLog:
    """
    Ordered, unbounded, append-only sequence of entries.

    Entries are ordered by when append() ran, which for remote results is
    completion order, not invocation order.
    """

    def __init__(self):
        self._entries: List[OperationLogEntry] = []

    def append(
        self,
        message: str,
        source: Optional[str] = None,
        failed: bool = False,
    ) -> OperationLogEntry:
        entry = OperationLogEntry(
            sequence=len(self._entries),
            timestamp=datetime.now(timezone.utc),
            message=message,
            source=source,
            failed=failed,
        )
        self._entries.append(entry)
        log = logger.warning if failed else logger.info
        log(message, extra={"log_source": source, "sequence": entry.sequence})
        return entry

    @property
    def entries(self) -> Tuple[OperationLogEntry, ...]:
        return tuple(self._entries)

    @property
    def last(self) -> Optional[OperationLogEntry]:
        return self._entries[-1] if self._entries else None

    def since(self, sequence: int) -> List[OperationLogEntry]:
        """Entries with sequence >= the given one (for polling clients)."""
        return self._entries[max(sequence, 0):]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(tuple(self._entries))
