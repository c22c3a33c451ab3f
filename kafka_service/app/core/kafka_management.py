"""
Kafka Service event management.
Owns the product event listener, the dead-letter producer and the
dashboard connection registry for the lifetime of the process.
"""

from typing import Optional

from aiokafka import AIOKafkaProducer  # type: ignore
from aiokafka.errors import KafkaConnectionError  # type: ignore

from ..listener.error_handler import (
    DeadLetterPublishingRecoverer,
    DefaultErrorHandler,
    ExponentialBackOff,
)
from ..listener.product_event_listener import ProductEventListener
from ..utils.logging import setup_kafka_logging
from ..websocket.connection_manager import ConnectionManager
from .setting import KafkaServiceSettings, get_settings

logger = setup_kafka_logging("kafka_service.events", get_settings().LOG_LEVEL)

connection_manager = ConnectionManager()

_dlt_producer: Optional[AIOKafkaProducer] = None
_listener: Optional[ProductEventListener] = None


def build_error_handler(
    producer: AIOKafkaProducer, settings: KafkaServiceSettings
) -> DefaultErrorHandler:
    backoff = ExponentialBackOff(
        initial_interval_ms=settings.KAFKA_BACKOFF_INITIAL_INTERVAL_MS,
        multiplier=settings.KAFKA_BACKOFF_MULTIPLIER,
        max_interval_ms=settings.KAFKA_BACKOFF_MAX_INTERVAL_MS,
        max_elapsed_ms=settings.KAFKA_BACKOFF_MAX_ELAPSED_MS,
    )
    recoverer = DeadLetterPublishingRecoverer(producer, settings.KAFKA_DLT_SUFFIX)
    return DefaultErrorHandler(recoverer, backoff)


async def init_kafka() -> None:
    """Start the dead-letter producer and the product event listener"""
    global _dlt_producer, _listener

    settings = get_settings()
    if not settings.KAFKA_ENABLED:
        logger.info("Kafka disabled: product events will not be consumed")
        return

    _dlt_producer = AIOKafkaProducer(
        bootstrap_servers=settings.KAFKA_BOOTSTRAP_SERVERS,
        client_id=f"{settings.SERVICE_NAME}-dlt-producer",
    )
    try:
        await _dlt_producer.start()  # type: ignore
    except KafkaConnectionError as e:
        logger.error(
            "Kafka unavailable, running without event consumption",
            extra={"error": str(e), "kafka_servers": settings.KAFKA_BOOTSTRAP_SERVERS},
        )
        await _dlt_producer.stop()  # type: ignore
        _dlt_producer = None
        return

    _listener = ProductEventListener(
        connection_manager, build_error_handler(_dlt_producer, settings), settings
    )
    await _listener.start()


async def close_kafka() -> None:
    global _dlt_producer, _listener
    try:
        if _listener:
            await _listener.stop()
    finally:
        if _dlt_producer:
            await _dlt_producer.stop()  # type: ignore
        _listener = None
        _dlt_producer = None


def get_connection_manager() -> ConnectionManager:
    return connection_manager


def is_listener_running() -> Optional[bool]:
    """None when Kafka is disabled, otherwise whether consumers are running"""
    if not get_settings().KAFKA_ENABLED:
        return None
    return bool(_listener and _listener.running and _listener.consumers)
