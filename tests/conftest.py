"""
Pytest fixtures for workspace tests.
"""

import asyncio
from typing import Any, Dict, List, Optional, Tuple

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.kernel.credits import CreditLedger
from src.kernel.documents import DocumentStore
from src.kernel.operation_log import OperationLog
from src.kernel.transactions import TransactionHistory
from src.orchestration.pipeline import OperationPipeline
from src.orchestration.workspace import SessionRegistry
from src.remote.base import RemoteCollaborator


class FakeCollaborator(RemoteCollaborator):
    """
    In-memory remote collaborator.

    Records every call. Responses and errors are set per endpoint; a gate
    (asyncio.Event) holds the call in flight until the test releases it.
    """

    def __init__(self):
        self.calls: List[Tuple[str, Dict[str, str]]] = []
        self.responses: Dict[str, Any] = {
            "audit": "No vulnerabilities found",
            "compile": "OK",
            "deploy": "Deployed",
            "prove": "Proved",
            "chat": "Resources cannot be copied or dropped.",
        }
        self.errors: Dict[str, Exception] = {}
        self.gates: Dict[str, asyncio.Event] = {}
        self.chat_answers: List[str] = []

    def gate(self, endpoint: str) -> asyncio.Event:
        event = asyncio.Event()
        self.gates[endpoint] = event
        return event

    def calls_to(self, endpoint: str) -> List[Dict[str, str]]:
        return [payload for name, payload in self.calls if name == endpoint]

    async def _handle(self, endpoint: str, payload: Dict[str, str]) -> Any:
        self.calls.append((endpoint, payload))
        gate = self.gates.get(endpoint)
        if gate is not None:
            await gate.wait()
        if endpoint in self.errors:
            raise self.errors[endpoint]
        return self.responses[endpoint]

    async def audit(self, code: str, manifest: str) -> Any:
        return await self._handle("audit", {"code": code, "move_toml": manifest})

    async def compile(self, code: str, manifest: str) -> Any:
        return await self._handle("compile", {"code": code, "move_toml": manifest})

    async def deploy(self, code: str, manifest: str) -> Any:
        return await self._handle("deploy", {"code": code, "move_toml": manifest})

    async def prove(self, code: str, manifest: str) -> Any:
        return await self._handle("prove", {"code": code, "move_toml": manifest})

    async def chat(self, question: str) -> str:
        answer = await self._handle("chat", {"question": question})
        if self.chat_answers:
            return self.chat_answers.pop(0)
        return answer


@pytest.fixture
def fake_remote() -> FakeCollaborator:
    return FakeCollaborator()


@pytest.fixture
def document_store() -> DocumentStore:
    """Store with the starter contract selected."""
    return DocumentStore.with_default()


@pytest.fixture
def operation_log() -> OperationLog:
    return OperationLog()


def make_pipeline(
    remote: RemoteCollaborator,
    balance: int = 1000,
    documents: Optional[DocumentStore] = None,
) -> OperationPipeline:
    """Pipeline over a fresh ledger, log and (by default) seeded store."""
    return OperationPipeline(
        documents=documents if documents is not None else DocumentStore.with_default(),
        ledger=CreditLedger(balance),
        log=OperationLog(),
        remote=remote,
        transactions=TransactionHistory(),
    )


@pytest.fixture
def pipeline(fake_remote: FakeCollaborator) -> OperationPipeline:
    return make_pipeline(fake_remote)


@pytest.fixture
def pipeline_factory(fake_remote: FakeCollaborator):
    """Build pipelines with a chosen balance and document store."""
    def factory(balance: int = 1000, documents: Optional[DocumentStore] = None) -> OperationPipeline:
        return make_pipeline(fake_remote, balance=balance, documents=documents)
    return factory


@pytest.fixture
def registry(fake_remote: FakeCollaborator) -> SessionRegistry:
    return SessionRegistry(fake_remote, starting_credits=1000)


@pytest_asyncio.fixture
async def client(registry: SessionRegistry):
    """Async API client backed by an in-memory registry and the fake collaborator."""
    from src.api.deps import get_registry
    from src.main import app

    app.dependency_overrides[get_registry] = lambda: registry
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_registry, None)
