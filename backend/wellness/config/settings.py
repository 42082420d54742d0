"""
Application configuration and settings.
Centralized configuration management using Pydantic Settings.
"""
from functools import lru_cache
from typing import List, Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_AI_GATEWAY_URL = "https://ai.gateway.lovable.dev/v1/chat/completions"
DEFAULT_AI_GATEWAY_MODEL = "google/gemini-2.5-flash"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Extra keys in .env are used by the Supabase CLI and the frontend build
    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
        env_file=[".env", ".env.local"],  # .env.local overrides .env
        populate_by_name=True,
    )

    # Application settings
    app_name: str = "Wellness Platform API"
    environment: str = Field(
        default="local",
        validation_alias=AliasChoices("SYSTEM_ENVIRONMENT", "ENVIRONMENT"),
    )

    # Supabase settings
    supabase_url: str = "http://localhost:54321"
    supabase_service_role_key: str = "test_service_role_key"

    # Authentication settings
    supabase_jwt_secret: str = "test_jwt_secret"

    # CORS settings
    allowed_origins: Optional[List[str]] = None

    # Logging settings
    log_level: str = "INFO"
    enable_request_logging: bool = True

    # AI gateway settings
    ai_gateway_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("AI_GATEWAY_API_KEY", "LOVABLE_API_KEY"),
    )
    ai_gateway_url: str = DEFAULT_AI_GATEWAY_URL
    ai_gateway_model: str = DEFAULT_AI_GATEWAY_MODEL
    # Seconds; None means no timeout on the upstream call
    ai_gateway_timeout: Optional[float] = None

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def ai_gateway_configured(self) -> bool:
        return bool(self.ai_gateway_api_key)


@lru_cache()
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
