"""Orchestration layer - operation pipeline and workspace sessions."""

from src.orchestration.pipeline import OperationOutcome, OperationPipeline, PipelineState
from src.orchestration.workspace import SessionRegistry, WorkspaceSession

__all__ = [
    "OperationOutcome",
    "OperationPipeline",
    "PipelineState",
    "SessionRegistry",
    "WorkspaceSession",
]
