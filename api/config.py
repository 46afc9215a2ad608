"""API configuration settings."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

from analytics.config import (
    DEFAULT_API_BASE_URL,
    DEFAULT_EMBEDDING_MODEL,
    DEFAULT_TEXT_MODEL,
    DEFAULT_VECTORIZE_INDEX,
    CloudflareConfig,
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Feedback Analytics API"
    debug: bool = False

    # Database
    database_url: str = "sqlite:///./feedback.db"

    # CORS
    cors_origins: list[str] = ["*"]

    # Cloudflare Workers AI / Vectorize
    cloudflare_account_id: Optional[str] = None
    cloudflare_api_token: Optional[str] = None
    cloudflare_api_base_url: str = DEFAULT_API_BASE_URL
    embedding_model: str = DEFAULT_EMBEDDING_MODEL
    text_model: str = DEFAULT_TEXT_MODEL
    vectorize_index: str = DEFAULT_VECTORIZE_INDEX
    request_timeout: float = 30.0

    # Logging
    log_level: str = "INFO"
    log_file: Optional[Path] = None

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def cloudflare_config(self) -> CloudflareConfig:
        """Build the client configuration for Workers AI and Vectorize."""
        return CloudflareConfig(
            account_id=self.cloudflare_account_id,
            api_token=self.cloudflare_api_token,
            base_url=self.cloudflare_api_base_url,
            embedding_model=self.embedding_model,
            text_model=self.text_model,
            vectorize_index=self.vectorize_index,
            timeout=self.request_timeout,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
