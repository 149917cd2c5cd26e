"""
Application configuration.
All values can be overridden through environment variables or a .env file.
"""
from typing import List
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database
    DATABASE_URL: str = "postgresql+asyncpg://postgres:postgres@db:5432/trainlog"
    SQL_ECHO: bool = False

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    # Display
    # Locale used for month names and week labels (pt-BR or en-US)
    DISPLAY_LOCALE: str = "pt-BR"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
