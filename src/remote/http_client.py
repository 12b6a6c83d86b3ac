"""
HTTP transport for remote collaborators.

Every call is a JSON POST to one configured endpoint:
  audit/compile/deploy/prove  {"code": ..., "move_toml": ...}
  chat                        {"question": ...}
No retries: a caller that wants resilience wraps the call itself.
"""

from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

from src.kernel.errors import RemoteCallError
from src.logging_config import get_logger
from src.remote.base import RemoteCollaborator

if TYPE_CHECKING:
    from src.ai.assistant import OpenAIAssistant

logger = get_logger(__name__)


class HttpRemoteCollaborator(RemoteCollaborator):
    """
    RemoteCollaborator backed by one httpx.AsyncClient.

    When an assistant is given, audit and chat fall back to it for
    endpoints that have no URL configured.
    """

    def __init__(
        self,
        *,
        audit_url: str = "",
        compile_url: str = "",
        deploy_url: str = "",
        prove_url: str = "",
        chat_url: str = "",
        timeout: float = 60.0,
        client: Optional[httpx.AsyncClient] = None,
        assistant: Optional["OpenAIAssistant"] = None,
    ):
        self.urls: Dict[str, str] = {
            "audit": audit_url,
            "compile": compile_url,
            "deploy": deploy_url,
            "prove": prove_url,
            "chat": chat_url,
        }
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self.assistant = assistant

    def is_configured(self, endpoint: str) -> bool:
        return bool(self.urls.get(endpoint))

    async def audit(self, code: str, manifest: str) -> Any:
        if self.assistant is not None and not self.is_configured("audit"):
            return await self.assistant.audit(code, manifest)
        return await self._post("audit", {"code": code, "move_toml": manifest})

    async def compile(self, code: str, manifest: str) -> Any:
        return await self._post("compile", {"code": code, "move_toml": manifest})

    async def deploy(self, code: str, manifest: str) -> Any:
        return await self._post("deploy", {"code": code, "move_toml": manifest})

    async def prove(self, code: str, manifest: str) -> Any:
        return await self._post("prove", {"code": code, "move_toml": manifest})

    async def chat(self, question: str) -> str:
        if self.assistant is not None and not self.is_configured("chat"):
            return await self.assistant.chat(question)
        answer = await self._post("chat", {"question": question})
        return answer if isinstance(answer, str) else str(answer)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _post(self, endpoint: str, payload: Dict[str, str]) -> Any:
        url = self.urls.get(endpoint, "")
        if not url:
            raise RemoteCallError(f"Invalid endpoint url for {endpoint}")

        try:
            resp = await self._client.post(url, json=payload, timeout=self.timeout)
        except httpx.TimeoutException as exc:
            logger.warning("Remote %s timed out: %s", endpoint, exc)
            raise RemoteCallError(f"{endpoint} timed out after {self.timeout}s") from exc
        except httpx.HTTPError as exc:
            logger.warning("Remote %s request failed: %s", endpoint, exc)
            raise RemoteCallError(f"{endpoint} request failed: {exc}") from exc

        if not resp.is_success:
            raise RemoteCallError(
                f"API Error: {resp.status_code}",
                status_code=resp.status_code,
            )

        try:
            return resp.json()
        except ValueError:
            return resp.text
