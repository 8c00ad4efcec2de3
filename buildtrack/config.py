"""Application configuration using Pydantic Settings"""

import logging
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    environment: str = "development"

    # Database
    database_url: str = "sqlite+aiosqlite:///./buildtrack.db"
    database_echo: bool = False

    # Security
    admin_password_hash: Optional[str] = None
    bcrypt_rounds: int = 12
    min_secret_length: int = 6

    # Projects
    default_thumbnail_url: str = "https://picsum.photos/800/600"

    # Media ingestion
    media_max_bytes: int = 50 * 1024 * 1024  # 50MB

    # AI summaries
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-3-pro-preview"
    gemini_thinking_budget: int = 32768

    # Logging
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="BUILDTRACK_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


# Global settings instance
settings = Settings()


def configure_logging(config: Optional[Settings] = None) -> None:
    """Configure root logging from settings"""
    config = config or settings
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
