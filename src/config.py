"""
Application configuration using pydantic-settings.
Loads from environment variables with .env file support.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Remote collaborators (empty URL = not configured)
    audit_api_url: str = ""
    compile_api_url: str = ""
    deploy_api_url: str = ""
    prove_api_url: str = ""
    chat_api_url: str = ""
    remote_timeout_seconds: float = 60.0

    # OpenAI (in-process assistant for chat/audit when no URL is set)
    openai_api_key: str = ""
    openai_model: str = "gpt-4o-mini"

    # Metering
    starting_credits: int = 1000

    # Block explorer
    explorer_base_url: str = "https://explorer.aptoslabs.com"
    explorer_network: str = "devnet"

    # Application
    debug: bool = False
    environment: str = "development"
    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # API Settings
    api_v1_prefix: str = "/api/v1"
    project_name: str = "Contract Playground Workspace"
    version: str = "0.3.0"

    @property
    def openai_configured(self) -> bool:
        """True when a usable (non-placeholder) OpenAI key is set."""
        key = (self.openai_api_key or "").strip()
        return bool(key) and not key.startswith("sk-your-")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
