"""
Kafka Service configuration
"""

from pathlib import Path
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict

KAFKA_SERVICE_DIR = Path(__file__).parent.parent.parent
ENV_FILE = KAFKA_SERVICE_DIR / ".env"


class KafkaServiceSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=str(ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "Kafka Service"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    SERVICE_NAME: str = "kafka-service"

    # Consumer
    KAFKA_ENABLED: bool = True
    KAFKA_BOOTSTRAP_SERVERS: str = "localhost:9092"
    KAFKA_GROUP_ID: str = "kafka-ui-group"
    KAFKA_TOPIC_PRODUCT_EVENTS: str = "product-events"
    KAFKA_AUTO_OFFSET_RESET: str = "earliest"
    KAFKA_LISTENER_CONCURRENCY: int = 3
    KAFKA_MAX_POLL_RECORDS: int = 500
    KAFKA_CONNECT_MAX_RETRIES: int = 5
    KAFKA_CONNECT_RETRY_DELAY: float = 2.0

    # Error handling: exponential backoff then dead-letter topic
    KAFKA_BACKOFF_INITIAL_INTERVAL_MS: int = 1000
    KAFKA_BACKOFF_MULTIPLIER: float = 2.0
    KAFKA_BACKOFF_MAX_INTERVAL_MS: int = 10000
    KAFKA_BACKOFF_MAX_ELAPSED_MS: int = 60000
    KAFKA_DLT_SUFFIX: str = ".DLT"

    # WebSocket
    WEBSOCKET_EVENTS_PATH: str = "/topic/events"

    # CORS
    CORS_ORIGINS: List[str] = ["*"]
    CORS_CREDENTIALS: bool = True
    CORS_METHODS: List[str] = ["*"]
    CORS_HEADERS: List[str] = ["*"]


_settings_instance = None


def get_settings() -> KafkaServiceSettings:
    """Get settings singleton instance"""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = KafkaServiceSettings()
    return _settings_instance
