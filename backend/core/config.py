"""Application configuration and settings."""
from pydantic_settings import BaseSettings
from functools import lru_cache
from typing import Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    mongo_url: str = "mongodb://localhost:27017"
    db_name: str = "ecoroute_database"

    # CORS
    cors_origins: str = "*"

    # Logging
    log_level: str = "INFO"

    # OpenAI
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    openai_temperature: float = 0.7
    openai_max_tokens: int = 1500

    # Timeouts (seconds)
    ai_timeout_seconds: float = 8.0
    history_timeout_seconds: float = 3.0

    # Rate limiting (requests per window, per client)
    rate_limit_window_seconds: float = 60.0
    suggestions_rate_limit: int = 10
    search_rate_limit: int = 15

    # Result sizes
    gazetteer_limit: int = 10
    search_gazetteer_limit: int = 5
    history_raw_limit: int = 20
    history_limit: int = 10
    ai_max_suggestions: int = 8
    response_limit: int = 10

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False

    @property
    def has_ai_credentials(self) -> bool:
        """False when the key is missing or still the template placeholder."""
        key = (self.openai_api_key or "").strip()
        return bool(key) and key != "sk-placeholder"


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
