# src/food_inventory/core/config.py
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Laufzeitkonfiguration aus Umgebungsvariablen bzw. `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    app_name: str = "Food Inventory API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    # JSON-Objekt API-Key -> E-Mail, z.B. '{"key_abc123": "alice@example.com"}'
    api_keys: dict[str, str] = Field(default_factory=dict)

    storage_backend: Literal["sqlite", "memory"] = "sqlite"
    database_url: str = "sqlite+aiosqlite:///./food_inventory.db"

    cors_origins: list[str] = Field(default=["*"])

    # Suchlimit pro Client-Adresse
    rate_limit_requests: int = Field(default=100, ge=1)
    rate_limit_window_seconds: int = Field(default=60, ge=1)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: object) -> object:
        return v.upper() if isinstance(v, str) else v

    @field_validator("api_keys")
    @classmethod
    def normalize_user_emails(cls, v: dict[str, str]) -> dict[str, str]:
        """E-Mails getrimmt und klein geschrieben, leere Einträge sind ein Fehler."""
        normalized = {}
        for key, email in v.items():
            email = email.strip().lower()
            if not key or not email:
                raise ValueError("api_keys entries need a non-empty key and email")
            normalized[key] = email
        return normalized

    @property
    def rate_limit(self) -> str:
        """Limit im Format von slowapi, z.B. '100/60 seconds'."""
        return f"{self.rate_limit_requests}/{self.rate_limit_window_seconds} seconds"


@lru_cache
def get_settings() -> Settings:
    return Settings()
