"""
Document schemas.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.kernel.documents import Document


class DocumentCreate(BaseModel):
    """Document creation request."""

    name: str = Field("New Contract", max_length=200)


class DocumentRename(BaseModel):
    """Rename request. Empty names are allowed."""

    name: str = Field(..., max_length=200)


class SourceUpdate(BaseModel):
    """New contract source for the selected document."""

    source: str


class ManifestUpdate(BaseModel):
    """New Move.toml for the selected document."""

    manifest: str


class TabRequest(BaseModel):
    """Tab key press over the selection [start, end)."""

    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)


class TabResponse(BaseModel):
    """Content after the indent and where the editor should put the cursor."""

    document_id: str
    source: str
    cursor: int
    last_edited: datetime


class DocumentResponse(BaseModel):
    """Full document."""

    id: str
    name: str
    source: str
    manifest: str
    last_edited: datetime
    selected: bool = False

    @classmethod
    def from_document(cls, doc: Document, selected_id: Optional[str]) -> "DocumentResponse":
        return cls(
            id=doc.id,
            name=doc.name,
            source=doc.source,
            manifest=doc.manifest,
            last_edited=doc.last_edited,
            selected=doc.id == selected_id,
        )


class DocumentListItem(BaseModel):
    """Document list entry (no content)."""

    id: str
    name: str
    last_edited: datetime
    selected: bool = False


class LinesResponse(BaseModel):
    """Line numbers for the editor gutter."""

    document_id: str
    line_count: int
    line_numbers: List[int]


class SelectionResponse(BaseModel):
    """Currently selected document, if any."""

    selected_id: Optional[str] = None
    document: Optional[DocumentResponse] = None


class ExampleContract(BaseModel):
    """A loadable example contract."""

    name: str
    source: str
