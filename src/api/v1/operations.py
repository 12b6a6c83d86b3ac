"""
Metered operation endpoints - audit, compile, deploy, prove.

The pipeline assumes one operation at a time; this layer enforces it by
refusing new operations while the workspace is busy.
"""

from fastapi import APIRouter, HTTPException, status

from src.api.deps import Workspace
from src.kernel.types import OperationKind
from src.logging_config import get_logger
from src.schemas.common import ErrorResponse
from src.schemas.operation import LogEntryResponse, OperationResponse, PipelineStatusResponse

logger = get_logger(__name__)
router = APIRouter()


@router.get("/workspaces/{workspace_id}/operations", response_model=PipelineStatusResponse)
async def get_pipeline_status(workspace: Workspace):
    pipeline = workspace.pipeline
    return PipelineStatusResponse(
        busy=pipeline.busy,
        pending=pipeline.pending.value if pipeline.pending else None,
        states={kind.value: pipeline.state_of(kind).value for kind in OperationKind},
    )


@router.post(
    "/workspaces/{workspace_id}/operations/{kind}",
    response_model=OperationResponse,
    responses={status.HTTP_409_CONFLICT: {"model": ErrorResponse}},
)
async def run_operation(workspace: Workspace, kind: OperationKind):
    """
    Run a metered operation on the selected document.

    Rejections and remote failures are not HTTP errors: they come back as
    the outcome state plus the log entry that records them.
    """
    pipeline = workspace.pipeline
    if pipeline.busy:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"Operation already in progress: {pipeline.pending.value}",
        )

    outcome = await pipeline.invoke(kind)
    logger.info(
        "Operation finished",
        extra={"operation": kind.value, "state": outcome.state.value},
    )
    return OperationResponse(
        kind=outcome.kind.value,
        state=outcome.state.value,
        started=outcome.started,
        debited=outcome.debited,
        balance=workspace.ledger.balance,
        document_id=outcome.document_id,
        response=outcome.response,
        entry=LogEntryResponse(**outcome.entry.model_dump()) if outcome.entry else None,
    )
