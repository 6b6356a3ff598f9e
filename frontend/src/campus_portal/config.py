"""
Application Configuration
Handles all environment variables and settings
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).parent.parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application
    APP_NAME: str = "Campus Facility Booking"
    ENVIRONMENT: str = "development"
    DEBUG: bool = True
    SECRET_KEY: str = "dev-secret-change-me"

    # Session cookie (signed JWT holding the API token)
    ALGORITHM: str = "HS256"
    SESSION_EXPIRE_MINUTES: int = 60 * 12
    SESSION_COOKIE_NAME: str = "campus_session"
    SESSION_COOKIE_SECURE: bool = False

    # Booking REST API
    API_BASE_URL: str = "http://localhost:8080"
    API_TIMEOUT_SECONDS: float = 15.0

    # Notification bell refresh interval
    NOTIFICATION_POLL_SECONDS: int = 30

    # CORS
    ALLOWED_ORIGINS: str = "http://localhost:3000"

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",")]

    class Config:
        env_file = BASE_DIR / ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


# Global settings instance
settings = Settings()
