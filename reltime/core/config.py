from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings"""

    # Locales
    DEFAULT_LOCALE: str = ""  # empty: use the runtime default locale
    FALLBACK_LOCALE: str = "en"

    # Formatter options
    LOCALE_MATCHER: str = "best fit"
    NUMERIC: str = "auto"
    STYLE: str = "long"

    # Middleware
    REQUEST_PROP: str = "rtf"
    LOCALE_PROP: str = "language"

    # Application
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        env_prefix = "RELTIME_"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()
