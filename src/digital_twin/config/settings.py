"""Configuration management for the digital twin agent."""

from pathlib import Path
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _sanitize_secret(value: str) -> str:
    """Remove BOM characters and whitespace from secrets.

    Secrets pasted into hosting dashboards may carry BOM characters that
    break HTTP headers.
    """
    if not value:
        return value
    return value.lstrip("\ufeff").strip()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Knowledge base
    knowledge_base_path: Path = Path("./data/knowledge-base.json")
    reserved_id_prefix: str = "cv_"
    ingest_category: str = "cv_content"
    ingest_chunk_size: int = 600

    # Retrieval
    retriever_backend: Literal["index", "static"] = "index"
    top_k_results: int = 5
    relevance_threshold: float = 0.05

    # Answer generation (OpenAI-compatible chat completions)
    llm_backend: Literal["openrouter", "template"] = "openrouter"
    openrouter_api_key: str = ""
    openrouter_url: str = "https://openrouter.ai/api/v1/chat/completions"
    llm_model: str = "z-ai/glm-4.5-air:free"
    llm_temperature: float = 0.3
    llm_max_tokens: int = 500
    llm_timeout_seconds: float = 30.0
    site_url: str = "http://localhost:3000"
    app_title: str = "Hero-Portfolio-Chatbot"

    # Persona
    owner_name: str = "the site owner"
    twin_name: str = "Hero"
    persona_prompt_file: Path | None = None
    scope_keywords: list[str] = []
    history_window: int = 8
    history_snippet_length: int = 150

    # Notifications
    notifier_backend: Literal["none", "webhook", "pushover"] = "none"
    push_title: str = "New chatbot message"
    max_push_body_length: int = 160
    push_webhook_url: str = ""
    push_webhook_token: str = ""
    push_timeout_seconds: float = 5.0
    pushover_token: str = ""
    pushover_user_key: str = ""
    pushover_url: str = "https://api.pushover.net/1/messages.json"
    pushover_timeout_seconds: float = 4.0
    pushover_max_message_length: int = 1024

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Logging
    log_level: str = "INFO"
    log_json: bool = False
    debug: bool = False

    @field_validator(
        "openrouter_api_key",
        "push_webhook_token",
        "pushover_token",
        "pushover_user_key",
        mode="after",
    )
    @classmethod
    def sanitize_secrets(cls, value: str) -> str:
        """Remove BOM and whitespace from secret values."""
        return _sanitize_secret(value)

    def load_persona_prompt(self) -> str | None:
        """Read the persona prompt override, if one is configured."""
        if self.persona_prompt_file and self.persona_prompt_file.exists():
            return self.persona_prompt_file.read_text(encoding="utf-8")
        return None

    def ensure_directories(self) -> None:
        """Create the knowledge base directory if it doesn't exist."""
        self.knowledge_base_path.parent.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
