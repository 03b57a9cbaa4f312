"""Application configuration."""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "Books Microservice"
    version: str = "1.0.0"
    # Exposes internal error detail in 500 responses; keep off in production
    debug: bool = False
    log_level: str = "INFO"

    # Server
    host: str = "0.0.0.0"
    port: int = 3000

    # Database
    database_url: str = "sqlite+aiosqlite:///./books.db"
    sql_echo: bool = False

    # CORS
    cors_origins: list[str] = ["*"]

    # Follower notifications (disabled when no URL is configured)
    notification_url: Optional[str] = None
    notification_timeout: float = 5.0

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
