"""
In-process Move assistant backed by OpenAI.

Used for chat and audit when no remote URL is configured for them but an
OpenAI key is. Errors from the SDK are raised as RemoteCallError so the
pipeline and chat session treat them like any other remote failure.
"""

from typing import Any, Optional

from src.kernel.errors import RemoteCallError
from src.logging_config import get_logger

logger = get_logger(__name__)

EXPERT_PREAMBLE = (
    "You are a blockchain expert specializing in Aptos Move smart contracts."
)

CHAT_INSTRUCTION = "Answer this question briefly:"
AUDIT_INSTRUCTION = (
    "Audit this code for vulnerabilities. List each finding with a severity "
    "(High, Medium, Low), a short description and the affected line."
)


def build_chat_prompt(question: str) -> str:
    return f"{EXPERT_PREAMBLE}\n{CHAT_INSTRUCTION}\n{question}"


def build_audit_prompt(code: str, manifest: str) -> str:
    parts = [EXPERT_PREAMBLE, AUDIT_INSTRUCTION, code]
    if manifest.strip():
        parts += ["Package manifest (Move.toml):", manifest]
    return "\n".join(parts)


class OpenAIAssistant:
    """Chat and audit through the OpenAI chat completions API."""

    def __init__(
        self,
        api_key: str,
        model: str = "gpt-4o-mini",
        client: Optional[Any] = None,
    ):
        self.api_key = api_key
        self.model = model
        self._client = client

    def _get_client(self):
        if self._client is None:
            from openai import AsyncOpenAI

            self._client = AsyncOpenAI(api_key=self.api_key)
        return self._client

    async def chat(self, question: str) -> str:
        if not question.strip():
            return "Empty question"
        return await self._complete(build_chat_prompt(question))

    async def audit(self, code: str, manifest: str = "") -> str:
        if not code.strip():
            return "Empty code"
        return await self._complete(build_audit_prompt(code, manifest))

    async def _complete(self, prompt: str) -> str:
        client = self._get_client()
        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[{"role": "system", "content": prompt}],
                temperature=0.3,
            )
        except Exception as exc:
            logger.warning("OpenAI request failed: %s", exc)
            raise RemoteCallError(f"Assistant request failed: {exc}") from exc
        content = (response.choices[0].message.content or "").strip()
        return content or "No response"
