"""Application configuration using pydantic-settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from light_duel.engine.rules import RULES_REGISTRY


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    bot_token: str = ""
    database_url: str = "sqlite+aiosqlite:///light_duel.db"

    debug: bool = False

    # Match configuration
    rules: str = "stun"  # "classic" or "stun"
    default_player_name: str = "Player"
    dice_seed: int | None = None  # Fixed seed for reproducible matches

    # Presentation
    log_tail: int = 8  # Number of recent log lines shown under a match

    @field_validator("rules")
    @classmethod
    def _check_rules(cls, value: str) -> str:
        name = value.strip().lower()
        if name not in RULES_REGISTRY:
            raise ValueError(f"Unknown rules '{value}', expected one of: {', '.join(RULES_REGISTRY)}")
        return name

    @field_validator("log_tail")
    @classmethod
    def _check_log_tail(cls, value: int) -> int:
        if value < 1:
            raise ValueError("log_tail must be at least 1")
        return value


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
