"""
Configuration module - loads all env vars using pydantic-settings.
This is the SINGLE SOURCE OF TRUTH for all config values.

The app factory takes a Settings instance explicitly; get_settings()
is only a cached default for scripts and the uvicorn entrypoint.
"""

from functools import lru_cache
from typing import List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # MongoDB
    mongodb_uri: str = "mongodb://localhost:27017"
    mongodb_db: str = "jobboard"
    mongodb_timeout_ms: int = 5000

    # JWT Auth
    jwt_secret_key: str = "change-this-secret"
    jwt_algorithm: str = "HS256"
    jwt_expire_days: int = 7

    # Session cookie
    cookie_name: str = "token"
    cookie_secure: bool = False

    # CORS
    cors_origins: List[str] = ["http://localhost:3000", "http://localhost:3001"]

    # Uploads
    max_resume_size_mb: int = 5

    # App
    debug: bool = False
    log_level: str = "INFO"

    @property
    def max_resume_size_bytes(self) -> int:
        return self.max_resume_size_mb * 1024 * 1024

    @property
    def cookie_max_age(self) -> int:
        """Cookie lifetime in seconds, matched to the token expiry."""
        return self.jwt_expire_days * 24 * 60 * 60

    # Pydantic v2 config
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8"
    )


@lru_cache()
def get_settings() -> Settings:
    return Settings()
