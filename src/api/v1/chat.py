"""
Chat endpoints - conversation with the Move assistant.
"""

from fastapi import APIRouter, HTTPException, status

from src.ai.chat_session import ChatMessage
from src.api.deps import Workspace
from src.schemas.chat import ChatAskResponse, ChatHistoryResponse, ChatMessageOut, ChatQuestion
from src.schemas.common import ErrorResponse

router = APIRouter()


def _message_out(message: ChatMessage) -> ChatMessageOut:
    return ChatMessageOut(
        role=message.role.value,
        content=message.content,
        created_at=message.created_at,
    )


@router.get("/workspaces/{workspace_id}/chat", response_model=ChatHistoryResponse)
async def get_chat(workspace: Workspace):
    """Conversation so far, oldest first."""
    return ChatHistoryResponse(
        messages=[_message_out(m) for m in workspace.chat.messages],
        thinking=workspace.chat.thinking,
    )


@router.post(
    "/workspaces/{workspace_id}/chat",
    response_model=ChatAskResponse,
    responses={status.HTTP_409_CONFLICT: {"model": ErrorResponse}},
)
async def ask_question(workspace: Workspace, body: ChatQuestion):
    """
    Ask the assistant a question.

    Blank questions are ignored (accepted=false). A failed backend call
    still counts as accepted; the failure is in the operation log.
    """
    chat = workspace.chat
    if chat.thinking:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="The assistant is still answering the previous question",
        )
    if not body.question.strip():
        return ChatAskResponse(accepted=False)

    reply = await chat.ask(body.question)
    return ChatAskResponse(
        accepted=True,
        reply=_message_out(reply) if reply else None,
        thinking=chat.thinking,
    )
