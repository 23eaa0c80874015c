"""Configuration settings using Pydantic"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Supabase Configuration (in-memory store is used when unset)
    supabase_url: Optional[str] = Field(default=None, alias="SUPABASE_URL")
    supabase_key: Optional[str] = Field(default=None, alias="SUPABASE_KEY")
    trips_table: str = Field(default="trips", alias="TRIPS_TABLE")

    # Trip document
    trip_id: str = Field(default="melbourne-trip-2026", alias="TRIP_ID")

    # Shared secret that unlocks editing
    trip_password: str = Field(default="melb2026", alias="TRIP_PASSWORD")
    access_cookie_name: str = Field(default="trip_key", alias="ACCESS_COOKIE_NAME")
    access_cookie_max_age: int = Field(default=60 * 60 * 24 * 365, alias="ACCESS_COOKIE_MAX_AGE")

    # Suggestions (Gemini)
    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    model_name: str = Field(default="gemini-2.5-flash-lite", alias="MODEL_NAME")
    suggestions_per_hour: int = Field(default=30, alias="SUGGESTIONS_PER_HOUR")

    # Expenses
    default_exchange_rate: float = Field(default=21.5, gt=0, alias="DEFAULT_EXCHANGE_RATE")  # AUD -> TWD

    # Application Settings
    env: str = Field(default="development", alias="ENV")
    log_level: str = Field(default="info", alias="LOG_LEVEL")

    # Security Settings
    request_timeout_seconds: int = Field(default=30, alias="REQUEST_TIMEOUT_SECONDS")

    # CORS Settings
    allowed_origins: str = Field(
        default="http://localhost:5173",
        alias="ALLOWED_ORIGINS",
        description="Comma-separated list of allowed origins for CORS"
    )

    @property
    def supabase_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
