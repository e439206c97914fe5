from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="allow")

    environment: Literal["development", "staging", "production"] = "development"
    database_url: str = "sqlite+aiosqlite:///./souq.db"
    log_level: str = "INFO"
    tracing_enabled: bool = True

    # Admin API security (empty disables the check for local development)
    admin_api_key: str = ""

    # Conversational AI providers
    openai_api_key: str | None = None
    openai_model: str = "gpt-4o"
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-2.5-flash"
    default_conversational_provider: str = "openai"
    analysis_provider: str = "openai"
    arbitration_provider: str = "openai"
    ai_request_timeout_seconds: float = 60.0
    ai_max_retries: int = 2

    # Text-to-speech providers
    elevenlabs_api_key: str | None = None
    elevenlabs_base_url: str = "https://api.elevenlabs.io"
    elevenlabs_model_id: str = "eleven_monolingual_v1"
    elevenlabs_default_voice_id: str = "21m00Tcm4TlvDq8ikWAM"
    default_tts_provider: str = "elevenlabs"

    # Outbound order webhooks
    webhook_timeout_seconds: float = 10.0
    webhook_user_agent: str = "LuxDeal-Webhook/1.0"


@lru_cache
def get_settings() -> Settings:
    return Settings()  # type: ignore[arg-type]


settings = get_settings()
