from __future__ import annotations

from functools import lru_cache

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./pashuvision.db"
    log_level: str = "INFO"
    environment: str = "dev"
    timezone: str = "Asia/Kolkata"
    # CORS
    cors_allow_origins: str = "*"
    # Local store
    seed_sample_data: bool = True
    create_schema_on_startup: bool = True
    # OpenAI
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.2
    # Sync
    sync_remote_url: str | None = None  # unset: simulated round trip
    sync_timeout_seconds: float = 10.0
    sync_simulated_latency_ms: int = 750
    sync_interval_seconds: int = 30  # 0 disables the background loop
    sync_start_online: bool = True

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    @field_validator("database_url")
    @classmethod
    def ensure_async_driver(cls, value: str) -> str:
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql+asyncpg://", 1)
        if value.startswith("postgresql://") and "+" not in value.split("://", 1)[0]:
            return value.replace("postgresql://", "postgresql+asyncpg://", 1)
        if value.startswith("sqlite://"):
            return value.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return value

    @property
    def cors_allow_origins_list(self) -> list[str]:
        """Convert cors_allow_origins string to list"""
        return [v.strip() for v in self.cors_allow_origins.split(",") if v.strip()]

    @property
    def sync_simulated_latency_seconds(self) -> float:
        return max(self.sync_simulated_latency_ms, 0) / 1000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
