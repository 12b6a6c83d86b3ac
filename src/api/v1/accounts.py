"""
Account endpoints.
"""

from typing import List

from fastapi import APIRouter, status

from src.api.deps import Workspace
from src.kernel.accounts import Account
from src.kernel.explorer import ExplorerLinks
from src.schemas.account import AccountResponse, ActivateResponse

router = APIRouter()


def _account_out(account: Account, explorer: ExplorerLinks) -> AccountResponse:
    return AccountResponse(
        public_key=account.public_key,
        is_active=account.is_active,
        explorer_url=explorer.account_url(account.public_key),
    )


@router.get("/workspaces/{workspace_id}/accounts", response_model=List[AccountResponse])
async def list_accounts(workspace: Workspace):
    return [_account_out(a, workspace.explorer) for a in workspace.accounts.accounts]


@router.post(
    "/workspaces/{workspace_id}/accounts",
    response_model=AccountResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_account(workspace: Workspace):
    """Add an inactive account with a fresh key."""
    return _account_out(workspace.accounts.create(), workspace.explorer)


@router.post(
    "/workspaces/{workspace_id}/accounts/{public_key}/activate",
    response_model=ActivateResponse,
)
async def activate_account(workspace: Workspace, public_key: str):
    """
    Make one account active and all others inactive.

    An unknown key leaves no account active; the response then has no account.
    """
    account = workspace.accounts.set_active(public_key)
    if account is None:
        return ActivateResponse(active=None)
    return ActivateResponse(active=_account_out(account, workspace.explorer))
