"""
KiraTakip configuration.
Settings come from environment variables or a local .env file.
"""

import logging
import secrets
from functools import lru_cache
from typing import List

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # App
    app_name: str = "KiraTakip API"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 5000
    cors_origins: List[str] = ["*"]

    # User table; the default is an in-memory SQLite database
    database_url: str = "sqlite://"

    # Sessions
    secret_key: str = ""
    access_token_expire_minutes: int = 60 * 24 * 7  # 7 days
    session_cookie_name: str = "kiratakip_session"
    session_cookie_secure: bool = False

    # Store / chat
    seed_demo_data: bool = True
    chat_response_delay: float = 1.0  # seconds before the canned reply

    @field_validator("secret_key", mode="before")
    @classmethod
    def generate_secret_key_if_empty(cls, v: str) -> str:
        if not v:
            logger.warning("No SECRET_KEY set, sessions will not survive a restart")
            return secrets.token_urlsafe(64)
        return v


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance; use as Depends(get_settings)."""
    return Settings()
