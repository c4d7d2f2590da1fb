"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    environment: str = _ENVIRONMENT
    debug: bool = False
    ingredient_max_limit: int = 100
    combo_default_limit: int = 5
    combo_frequency_weight: float = 0.5
    combo_popularity_weight: float = 0.3
    combo_nutrition_weight: float = 0.2

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_csv_list(raw: str | None) -> list[str]:
    """Split a comma or whitespace separated query value into clean entries."""
    if raw is None:
        return []
    cleaned = raw.replace(",", " ")
    return [chunk.strip() for chunk in cleaned.split() if chunk.strip()]
