"""
SoloBill Ads application configuration.
Centralized settings loaded from environment variables or the .env file.
"""

from decimal import Decimal
from functools import lru_cache
from typing import Optional, List
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Main application settings.
    Values come from environment variables or the .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
    )

    # Application
    APP_NAME: str = "SoloBill Ads"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = True
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Server
    HOST: str = "0.0.0.0"

    # CORS
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    # Business identity (invoice header, email signature)
    BUSINESS_NAME: str = "SOLOBILL ADS"
    SENDER_NAME: str = "Jane Freelancer"

    # Invoice defaults
    DEFAULT_TAX_RATE: Decimal = Decimal("7")
    PAYMENT_TERMS_DAYS: int = 14

    # Load the demo clients and invoices at startup
    SEED_DEMO_DATA: bool = True

    # PDF export
    PDF_STORAGE_PATH: str = "./storage/invoices"

    # Gemini text generation (optional)
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-3-flash-preview"
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_TIMEOUT: float = 30.0

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT.lower() == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Return the single settings instance.
    The LRU cache avoids re-reading the environment on every call.
    """
    return Settings()


# Global settings instance
settings = get_settings()
