"""Application Configuration - environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) - single instance per process
    - Every setting has a default: the app runs with no environment at all

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Store
    threads_collection: str = "threads"

    # Board views
    threads_page_size: int = 10
    reply_preview_size: int = 3

    @field_validator("threads_page_size", "reply_preview_size")
    @classmethod
    def non_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("page sizes must be >= 0")
        return v

    # API
    cors_origins: list[str] = ["*"]
    frame_options: str = "SAMEORIGIN"
    referrer_policy: str = "same-origin"

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
