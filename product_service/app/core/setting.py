"""
Product Service configuration using shared patterns
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

# Get the product service directory path
PRODUCT_SERVICE_DIR = Path(__file__).parent.parent.parent
ENV_FILE = PRODUCT_SERVICE_DIR / ".env"


class ProductSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Product Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"

    # Service specific
    SERVICE_NAME: str = "product-service"

    # Database
    PRODUCT_DATABASE_URL: str = "sqlite+aiosqlite:///./productdb.sqlite3"
    DATABASE_POOL_SIZE: int = 25
    DATABASE_MAX_OVERFLOW: int = 50
    SEED_SAMPLE_DATA: bool = True

    # Security (tokens are issued elsewhere, only verified here)
    SECRET_KEY: str = "change-me"
    ALGORITHM: str = "HS256"
    ADMIN_ROLE: str = "ROLE_ADMIN"

    # Kafka for events
    KAFKA_ENABLED: bool = True
    KAFKA_BOOTSTRAP_SERVERS: str = "localhost:9092"
    KAFKA_TOPIC_PRODUCT_EVENTS: str = "product-events"
    KAFKA_TOPIC_PRODUCT_EVENTS_PARTITIONS: int = 3
    KAFKA_DLT_SUFFIX: str = ".DLT"
    KAFKA_CONNECT_MAX_RETRIES: int = 5
    KAFKA_CONNECT_RETRY_DELAY: float = 2.0

    # GraphQL
    GRAPHQL_PATH: str = "/graphql"
    GRAPHIQL_ENABLED: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: List[str] = ["*"]
    CORS_HEADERS: List[str] = ["*"]

    @property
    def product_dlt_topic(self) -> str:
        return f"{self.KAFKA_TOPIC_PRODUCT_EVENTS}{self.KAFKA_DLT_SUFFIX}"


# Create a singleton instance
_settings_instance = None


def get_settings() -> ProductSettings:
    """Get settings singleton instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = ProductSettings()
    return _settings_instance
