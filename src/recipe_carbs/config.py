"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    telegram_bot_token: str
    openai_api_key: str
    openai_model: str = "gpt-3.5-turbo"
    openai_temperature: float = 0.5
    openai_top_p: float = 1.0
    openai_max_tokens: int = 1000
    openai_timeout_seconds: float = 60
    nutritionix_app_id: str
    nutritionix_api_key: str
    nutritionix_base_url: str = "https://trackapi.nutritionix.com"
    http_timeout_seconds: float = 15
    min_recipe_length: int = 10
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
