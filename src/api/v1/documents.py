"""
Document endpoints - CRUD, selection, editing and example contracts.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Response, status

from src.api.deps import Workspace, require_document
from src.kernel.documents import EXAMPLE_CONTRACTS
from src.kernel.errors import DocumentNotSelectedError
from src.kernel.text_buffer import insert_tab, line_numbers
from src.logging_config import get_logger
from src.schemas.document import (
    DocumentCreate,
    DocumentListItem,
    DocumentRename,
    DocumentResponse,
    ExampleContract,
    LinesResponse,
    ManifestUpdate,
    SelectionResponse,
    SourceUpdate,
    TabRequest,
    TabResponse,
)

logger = get_logger(__name__)
router = APIRouter()


def _not_selected(exc: DocumentNotSelectedError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


def _selection(workspace) -> SelectionResponse:
    doc = workspace.documents.selected
    return SelectionResponse(
        selected_id=workspace.documents.selected_id,
        document=DocumentResponse.from_document(doc, doc.id) if doc else None,
    )


@router.get("/examples", response_model=List[ExampleContract])
async def list_examples():
    """Example contracts that can be loaded into the selected document."""
    return [ExampleContract(name=name, source=source) for name, source in EXAMPLE_CONTRACTS.items()]


@router.get("/workspaces/{workspace_id}/documents", response_model=List[DocumentListItem])
async def list_documents(workspace: Workspace):
    """List documents in creation order."""
    selected_id = workspace.documents.selected_id
    return [
        DocumentListItem(
            id=doc.id,
            name=doc.name,
            last_edited=doc.last_edited,
            selected=doc.id == selected_id,
        )
        for doc in workspace.documents.documents
    ]


@router.post(
    "/workspaces/{workspace_id}/documents",
    response_model=DocumentResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_document(workspace: Workspace, data: DocumentCreate):
    """Create a document from the template. It is not selected."""
    doc = workspace.documents.create(name=data.name)
    return DocumentResponse.from_document(doc, workspace.documents.selected_id)


@router.get("/workspaces/{workspace_id}/selection", response_model=SelectionResponse)
async def get_selection(workspace: Workspace):
    """The selected document, or none."""
    return _selection(workspace)


@router.get("/workspaces/{workspace_id}/documents/{document_id}", response_model=DocumentResponse)
async def get_document(workspace: Workspace, document_id: str):
    doc = require_document(workspace, document_id)
    return DocumentResponse.from_document(doc, workspace.documents.selected_id)


@router.patch("/workspaces/{workspace_id}/documents/{document_id}", response_model=DocumentResponse)
async def rename_document(workspace: Workspace, document_id: str, data: DocumentRename):
    """Rename a document."""
    doc = workspace.documents.rename(document_id, data.name)
    if doc is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Document not found")
    return DocumentResponse.from_document(doc, workspace.documents.selected_id)


@router.delete(
    "/workspaces/{workspace_id}/documents/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
async def delete_document(workspace: Workspace, document_id: str):
    """Delete a document. Deleting an unknown id succeeds and changes nothing."""
    workspace.documents.delete(document_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/workspaces/{workspace_id}/documents/{document_id}/select",
    response_model=SelectionResponse,
)
async def select_document(workspace: Workspace, document_id: str):
    require_document(workspace, document_id)
    workspace.documents.select(document_id)
    return _selection(workspace)


@router.put(
    "/workspaces/{workspace_id}/documents/{document_id}/source",
    response_model=DocumentResponse,
)
async def update_source(workspace: Workspace, document_id: str, data: SourceUpdate):
    """Replace the source of the selected document."""
    require_document(workspace, document_id)
    try:
        doc = workspace.documents.update_content(document_id, data.source)
    except DocumentNotSelectedError as exc:
        raise _not_selected(exc)
    return DocumentResponse.from_document(doc, workspace.documents.selected_id)


@router.put(
    "/workspaces/{workspace_id}/documents/{document_id}/manifest",
    response_model=DocumentResponse,
)
async def update_manifest(workspace: Workspace, document_id: str, data: ManifestUpdate):
    """Replace the Move.toml of the selected document."""
    require_document(workspace, document_id)
    try:
        doc = workspace.documents.update_manifest(document_id, data.manifest)
    except DocumentNotSelectedError as exc:
        raise _not_selected(exc)
    return DocumentResponse.from_document(doc, workspace.documents.selected_id)


@router.post(
    "/workspaces/{workspace_id}/documents/{document_id}/tab",
    response_model=TabResponse,
)
async def press_tab(workspace: Workspace, document_id: str, data: TabRequest):
    """
    Indent over [start, end) in the selected document.

    The returned cursor is where the editor should place the caret once it
    has rendered the new source.
    """
    doc = require_document(workspace, document_id)
    try:
        result = insert_tab(doc.source, data.start, data.end)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    try:
        doc = workspace.documents.update_content(document_id, result.content)
    except DocumentNotSelectedError as exc:
        raise _not_selected(exc)
    return TabResponse(
        document_id=doc.id,
        source=doc.source,
        cursor=result.cursor,
        last_edited=doc.last_edited,
    )


@router.get(
    "/workspaces/{workspace_id}/documents/{document_id}/lines",
    response_model=LinesResponse,
)
async def get_line_numbers(workspace: Workspace, document_id: str):
    doc = require_document(workspace, document_id)
    numbers = line_numbers(doc.source)
    return LinesResponse(document_id=doc.id, line_count=len(numbers), line_numbers=numbers)


@router.post(
    "/workspaces/{workspace_id}/examples/{example_name}/load",
    response_model=SelectionResponse,
)
async def load_example(workspace: Workspace, example_name: str):
    """Replace the selected document's source with an example contract."""
    if example_name not in EXAMPLE_CONTRACTS:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Example not found")
    workspace.documents.load_example(example_name)
    return _selection(workspace)
