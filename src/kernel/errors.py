"""
Workspace error kinds.

ValidationError and InsufficientCreditsError stop an operation before any
remote call. RemoteCallError covers non-success responses and transport
failures of a remote collaborator. None of them is fatal: the pipeline and
the chat session turn them into log lines.
"""

from typing import Optional


class WorkspaceError(Exception):
    """Base class for workspace errors."""


class ValidationError(WorkspaceError):
    """A precondition for starting an operation does not hold."""


class InsufficientCreditsError(WorkspaceError):
    """The credit balance does not cover the price of an operation."""

    def __init__(self, balance: int, amount: int):
        self.balance = balance
        self.amount = amount
        super().__init__(
            f"Insufficient credits: {amount} required, balance is {balance}"
        )


class RemoteCallError(WorkspaceError):
    """A remote collaborator failed or answered with a non-success status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class DocumentNotFoundError(WorkspaceError):
    """No document with the given id exists in the store."""

    def __init__(self, document_id: str):
        self.document_id = document_id
        super().__init__(f"Document not found: {document_id}")


class DocumentNotSelectedError(WorkspaceError):
    """Content edits are only accepted for the selected document."""

    def __init__(self, document_id: str, selected_id: Optional[str]):
        self.document_id = document_id
        self.selected_id = selected_id
        super().__init__(
            f"Document {document_id} is not selected (selected: {selected_id or 'none'})"
        )
