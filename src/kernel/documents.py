"""
Document Store - named contract documents and the current selection.

The store is the single source of truth. The selection is only an id and
is resolved against the store on every read, so there is no second copy
of the selected document that could drift.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from pydantic import BaseModel

from src.kernel.errors import DocumentNotFoundError, DocumentNotSelectedError
from src.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_MANIFEST = """[package]
name = "contract"
version = "1.0.0"
authors = [""]

[addresses]
contract = "_"

[dependencies]
AptosFramework = { git = "https://github.com/aptos-labs/aptos-core.git", subdir = "aptos-move/framework/aptos-framework/", rev = "main"}"""

DEFAULT_SOURCE = """module contract::hello {
    use std::string;
    use aptos_framework::account;

    #[view]
    public fun hello(): string::String {
        string::utf8(b"Hello, Move!")
    }
}"""

EXAMPLE_CONTRACTS: Dict[str, str] = {
    "Hello World": DEFAULT_SOURCE,
    "Token Contract": """module contract::token {
    use std::string;
    use aptos_framework::coin;

    struct MyToken {}

    fun init_module(account: &signer) {
        coin::register<MyToken>(account);
    }
}""",
}

DEFAULT_NAME = "New Contract"
SEED_NAME = "HelloWorld"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def generate_document_id() -> str:
    """
    Short random id.

    Uniqueness is probabilistic only; fine for a session-local store.
    """
    return uuid.uuid4().hex[:9]


class Document(BaseModel):
    """A contract source file plus its Move.toml manifest."""

    id: str
    name: str
    source: str
    manifest: str
    last_edited: datetime


class DocumentStore:
    """
    In-memory CRUD over documents with a single selection pointer.

    Every mutating call leaves the store and the selection consistent:
    the selected id, when set, always names a stored document.
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow):
        self._documents: List[Document] = []
        self._selected_id: Optional[str] = None
        self._clock = clock

    @classmethod
    def with_default(cls, clock: Callable[[], datetime] = _utcnow) -> "DocumentStore":
        """Store holding the starter contract, selected."""
        store = cls(clock=clock)
        seed = store.create(name=SEED_NAME)
        store.select(seed.id)
        return store

    # ── Reads ────────────────────────────────────────────────────────────

    @property
    def documents(self) -> List[Document]:
        return list(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def get(self, document_id: str) -> Optional[Document]:
        for doc in self._documents:
            if doc.id == document_id:
                return doc
        return None

    def require(self, document_id: str) -> Document:
        doc = self.get(document_id)
        if doc is None:
            raise DocumentNotFoundError(document_id)
        return doc

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected(self) -> Optional[Document]:
        if self._selected_id is None:
            return None
        return self.get(self._selected_id)

    # ── Mutations ────────────────────────────────────────────────────────

    def create(self, name: str = DEFAULT_NAME) -> Document:
        """Append a document with template content. Does not select it."""
        doc = Document(
            id=generate_document_id(),
            name=name,
            source=DEFAULT_SOURCE,
            manifest=DEFAULT_MANIFEST,
            last_edited=self._clock(),
        )
        self._documents.append(doc)
        logger.debug("Document created", extra={"document_id": doc.id})
        return doc

    def delete(self, document_id: str) -> bool:
        """
        Remove a document. Unknown ids are ignored.

        If the removed document was selected, the selection moves to the
        first remaining document, or to none.
        """
        remaining = [d for d in self._documents if d.id != document_id]
        if len(remaining) == len(self._documents):
            return False
        self._documents = remaining
        if self._selected_id == document_id:
            self._selected_id = remaining[0].id if remaining else None
        logger.debug(
            "Document deleted",
            extra={"document_id": document_id, "selected_id": self._selected_id},
        )
        return True

    def rename(self, document_id: str, name: str) -> Optional[Document]:
        # Empty names are accepted here; the client decides what to allow
        doc = self.get(document_id)
        if doc is None:
            return None
        doc.name = name
        return doc

    def select(self, document_id: str) -> Document:
        doc = self.require(document_id)
        self._selected_id = doc.id
        return doc

    def clear_selection(self) -> None:
        self._selected_id = None

    def update_content(self, document_id: str, source: str) -> Document:
        """Replace the source of the selected document."""
        doc = self._require_selected(document_id)
        doc.source = source
        self._touch(doc)
        return doc

    def update_manifest(self, document_id: str, manifest: str) -> Document:
        """Replace the Move.toml of the selected document."""
        doc = self._require_selected(document_id)
        doc.manifest = manifest
        self._touch(doc)
        return doc

    def load_example(self, example_name: str) -> Optional[Document]:
        """
        Overwrite the selected document's source with an example contract.

        Returns None when nothing is selected.

        Raises:
            KeyError: unknown example name
        """
        source = EXAMPLE_CONTRACTS[example_name]
        doc = self.selected
        if doc is None:
            return None
        return self.update_content(doc.id, source)

    # ── Helpers ──────────────────────────────────────────────────────────

    def _require_selected(self, document_id: str) -> Document:
        doc = self.require(document_id)
        if doc.id != self._selected_id:
            raise DocumentNotSelectedError(document_id, self._selected_id)
        return doc

    def _touch(self, doc: Document) -> None:
        # last_edited must move forward even if the clock has not ticked
        now = self._clock()
        if now <= doc.last_edited:
            now = doc.last_edited + timedelta(microseconds=1)
        doc.last_edited = now
