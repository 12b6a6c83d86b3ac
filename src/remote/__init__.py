"""
Remote collaborators - audit, compile, deploy, prove and chat backends.
"""

from typing import Optional

import httpx

from src.config import Settings
from src.remote.base import RemoteCollaborator
from src.remote.http_client import HttpRemoteCollaborator


def build_remote_collaborator(
    settings: Settings,
    client: Optional[httpx.AsyncClient] = None,
) -> HttpRemoteCollaborator:
    """
    Wire the configured endpoints into one collaborator.

    Chat and audit fall back to the in-process OpenAI assistant when they
    have no URL and an OpenAI key is configured.
    """
    assistant = None
    if settings.openai_configured and not (settings.chat_api_url and settings.audit_api_url):
        from src.ai.assistant import OpenAIAssistant

        assistant = OpenAIAssistant(
            api_key=settings.openai_api_key.strip(),
            model=settings.openai_model,
        )
    return HttpRemoteCollaborator(
        audit_url=settings.audit_api_url,
        compile_url=settings.compile_api_url,
        deploy_url=settings.deploy_api_url,
        prove_url=settings.prove_api_url,
        chat_url=settings.chat_api_url,
        timeout=settings.remote_timeout_seconds,
        client=client,
        assistant=assistant,
    )


__all__ = [
    "RemoteCollaborator",
    "HttpRemoteCollaborator",
    "build_remote_collaborator",
]
