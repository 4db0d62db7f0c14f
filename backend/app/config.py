"""Application configuration via environment variables."""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env or environment."""

    DATABASE_URL: str = "sqlite:///./chapter.db"
    SUPABASE_JWT_SECRET: str = "dev-jwt-secret-change-me"
    JWT_AUDIENCE: str = "authenticated"
    CORS_ORIGINS: str = "http://localhost:5173"
    GEOAPIFY_API_KEY: str = ""
    GEOAPIFY_URL: str = "https://api.geoapify.com/v1/geocode/search"
    EVENT_TIMEZONE: str = "America/Phoenix"  # IANA tz for event_date/event_time
    DEFAULT_CHECK_IN_RADIUS_M: int = 100
    DEFAULT_CHECK_IN_WINDOW_MIN: int = 15
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"


settings = Settings()
