"""
User Service configuration
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

USER_SERVICE_DIR = Path(__file__).parent.parent.parent
ENV_FILE = USER_SERVICE_DIR / ".env"


class UserServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "User Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    SERVICE_NAME: str = "user-service"

    # Database
    USER_DATABASE_URL: str = "sqlite+aiosqlite:///./userdb.sqlite3"
    SEED_SAMPLE_DATA: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: List[str] = ["*"]
    CORS_HEADERS: List[str] = ["*"]


_settings_instance = None


def get_settings() -> UserServiceSettings:
    """Get settings singleton instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = UserServiceSettings()
    return _settings_instance
