"""
Workspace endpoints - session lifecycle, credits, log and transactions.
"""

from typing import List

from fastapi import APIRouter, HTTPException, Query, Response, status

from src.api.deps import Registry, Workspace
from src.kernel.credits import PRICES
from src.orchestration.workspace import WorkspaceSession
from src.schemas.account import TransactionResponse
from src.schemas.operation import CreditsResponse, LogEntryResponse, LogResponse
from src.schemas.workspace import WorkspaceResponse

router = APIRouter()


def _summary(workspace: WorkspaceSession) -> WorkspaceResponse:
    active = workspace.accounts.active
    pending = workspace.pipeline.pending
    return WorkspaceResponse(
        id=workspace.id,
        created_at=workspace.created_at,
        balance=workspace.ledger.balance,
        selected_id=workspace.documents.selected_id,
        document_count=len(workspace.documents),
        account_count=len(workspace.accounts),
        active_account=active.public_key if active else None,
        busy=workspace.pipeline.busy,
        pending=pending.value if pending else None,
        thinking=workspace.chat.thinking,
        log_length=len(workspace.log),
    )


@router.post("", response_model=WorkspaceResponse, status_code=status.HTTP_201_CREATED)
async def create_workspace(registry: Registry):
    """Start a new workspace with the starter contract selected."""
    return _summary(registry.create())


@router.get("/{workspace_id}", response_model=WorkspaceResponse)
async def get_workspace_summary(workspace: Workspace):
    """Get balance, selection and busy flags of a workspace."""
    return _summary(workspace)


@router.delete("/{workspace_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_workspace(workspace_id: str, registry: Registry):
    """Discard a workspace and everything in it."""
    if not registry.discard(workspace_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Workspace not found",
        )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{workspace_id}/credits", response_model=CreditsResponse)
async def get_credits(workspace: Workspace):
    """Current balance and operation prices."""
    return CreditsResponse(
        balance=workspace.ledger.balance,
        prices={kind.value: price for kind, price in PRICES.items()},
        affordable={
            kind.value: workspace.ledger.can_afford(price) for kind, price in PRICES.items()
        },
    )


@router.get("/{workspace_id}/logs", response_model=LogResponse)
async def get_logs(
    workspace: Workspace,
    since: int = Query(0, ge=0, description="First sequence number to return"),
):
    """Operation log entries, oldest first."""
    entries = workspace.log.since(since)
    return LogResponse(
        entries=[LogEntryResponse(**e.model_dump()) for e in entries],
        next_sequence=len(workspace.log),
    )


@router.get("/{workspace_id}/transactions", response_model=List[TransactionResponse])
async def list_transactions(workspace: Workspace):
    """Deploy transactions, newest first."""
    return [
        TransactionResponse(
            hash=tx.hash,
            timestamp=tx.timestamp,
            status=tx.status.value,
            explorer_url=workspace.explorer.transaction_url(tx.hash),
        )
        for tx in workspace.transactions.transactions
    ]
