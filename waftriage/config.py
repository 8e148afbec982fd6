"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )
    
    # Application Settings
    app_env: str = "development"
    debug: bool = True
    app_name: str = "WAF Triage"
    log_level: str = "INFO"
    
    # Log retrieval API
    logs_api_url: str = "https://api.zntinel.com"
    logs_api_session_cookie: str = ""
    logs_api_timeout_seconds: float = 30.0
    
    # Report formatting
    thousands_separator: str = ","


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
