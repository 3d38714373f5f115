"""
Application configuration using environment variables.
"""
import os
import secrets
from functools import lru_cache
from pydantic_settings import BaseSettings
from typing import List


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    app_name: str = "LIRA Intern Portal API"
    debug: bool = False
    environment: str = "development"
    version: str = "1.0.0"

    # Security
    secret_key: str = os.getenv("SECRET_KEY", "")
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60  # 1 hour
    refresh_token_expire_days: int = 7

    # Database
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./lira_portal.db")

    # CORS (function endpoints are always wildcard)
    cors_origins: List[str] = ["*"]

    # Rate limiting
    login_rate_limit: str = "5/minute"
    register_rate_limit: str = "3/minute"
    function_rate_limit: str = "30/minute"

    # AI assistant (Anthropic Messages API)
    anthropic_api_key: str = ""
    anthropic_api_url: str = "https://api.anthropic.com/v1/messages"
    anthropic_version: str = "2023-06-01"
    assistant_model: str = "claude-3-5-sonnet-20241022"
    assistant_max_tokens: int = 1500

    # Free models (Hugging Face Inference API)
    hugging_face_access_token: str = ""
    hugging_face_api_url: str = "https://api-inference.huggingface.co/models"

    # Upstream HTTP timeout in seconds
    inference_timeout: float = 60.0

    # Context digest
    context_activity_limit: int = 50
    context_profile_limit: int = 100
    context_comment_limit: int = 100
    context_fetch_workers: int = 4

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    settings = Settings()
    if not settings.secret_key:
        if settings.environment == "production":
            raise ValueError(
                "SECRET_KEY must be set in production! "
                "Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\""
            )
        settings.secret_key = secrets.token_urlsafe(32)
    return settings
