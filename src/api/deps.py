"""
FastAPI dependencies for workspace lookup.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, Request, status

from src.kernel.documents import Document
from src.logging_config import workspace_id_var
from src.orchestration.workspace import SessionRegistry, WorkspaceSession


def get_registry(request: Request) -> SessionRegistry:
    """Dependency returning the process-wide session registry (set up in lifespan)."""
    registry = getattr(request.app.state, "registry", None)
    if registry is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Workspace registry not initialized",
        )
    return registry


Registry = Annotated[SessionRegistry, Depends(get_registry)]


async def get_workspace(workspace_id: str, registry: Registry) -> WorkspaceSession:
    """Resolve the workspace from the path or raise 404."""
    workspace = registry.get(workspace_id)
    if workspace is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Workspace not found",
        )
    workspace_id_var.set(workspace.id)
    return workspace


Workspace = Annotated[WorkspaceSession, Depends(get_workspace)]


def require_document(workspace: WorkspaceSession, document_id: str) -> Document:
    """Get a document from the workspace or raise 404."""
    doc = workspace.documents.get(document_id)
    if doc is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Document not found",
        )
    return doc
