"""
API v1 routes.
"""

from fastapi import APIRouter

from src.api.v1 import accounts, chat, documents, operations, workspaces

router = APIRouter()

router.include_router(workspaces.router, prefix="/workspaces", tags=["Workspaces"])
router.include_router(documents.router, tags=["Documents"])
router.include_router(accounts.router, tags=["Accounts"])
router.include_router(operations.router, tags=["Operations"])
router.include_router(chat.router, tags=["Chat"])
