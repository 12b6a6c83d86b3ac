"""
Remote collaborator interface.

Each method is an opaque point-to-point call. Responses are whatever the
backend answers (text or decoded JSON) and are passed through unmodified;
failures surface as exceptions, normally RemoteCallError.
"""

from abc import ABC, abstractmethod
from typing import Any

from src.kernel.types import OperationKind


class RemoteCollaborator(ABC):
    """Backends for the metered operations and the assistant."""

    @abstractmethod
    async def audit(self, code: str, manifest: str) -> Any:
        """Audit a contract for vulnerabilities."""

    @abstractmethod
    async def compile(self, code: str, manifest: str) -> Any:
        """Compile a Move package."""

    @abstractmethod
    async def deploy(self, code: str, manifest: str) -> Any:
        """Publish a Move package."""

    @abstractmethod
    async def prove(self, code: str, manifest: str) -> Any:
        """Run the formal prover over a Move package."""

    @abstractmethod
    async def chat(self, question: str) -> str:
        """Answer a free-form question."""

    async def run(self, kind: OperationKind, code: str, manifest: str) -> Any:
        """Dispatch a metered operation by kind."""
        handler = {
            OperationKind.AUDIT: self.audit,
            OperationKind.COMPILE: self.compile,
            OperationKind.DEPLOY: self.deploy,
            OperationKind.PROVE: self.prove,
        }[kind]
        return await handler(code, manifest)

    async def aclose(self) -> None:
        """Release transport resources, if any."""
