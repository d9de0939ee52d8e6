"""Typed settings configuration - single source of truth."""

from functools import lru_cache

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Model service
    gemini_api_key: SecretStr | None = None
    grounded_model: str = "gemini-2.5-flash"
    structured_model: str = "gemini-3-pro-preview"

    # Sampling
    temperature: float = 0.9
    top_p: float = 0.95
    top_k: int = 64

    # Prompt
    regional_focus: str | None = None

    # Mode selection: whether a 0.0 latitude/longitude counts as a location
    zero_coordinate_is_present: bool = True

    # UI
    ui_origin: str = "http://localhost:8501"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
