"""
Product Service Event Management
Initializes and manages Kafka event publishing and the in-process
subscription sinks for the product service.
"""

from typing import Optional

from ..events.base.kafka_client import KafkaEventPublisher, TopicSpec
from ..events.event_producers import ProductEventProducer
from ..events.multicast import MulticastSink
from ..models.product import Product
from ..utils.logging import setup_product_logging as setup_logging
from .setting import get_settings

# Setup structured logging for event management
logger = setup_logging("product_service.events", log_level=get_settings().LOG_LEVEL)

# Global instances
_kafka_publisher: Optional[KafkaEventPublisher] = None
_product_event_producer: Optional[ProductEventProducer] = None

# Sinks for GraphQL subscriptions; they live as long as the process
product_created_sink: MulticastSink[Product] = MulticastSink("product-created")
product_updated_sink: MulticastSink[Product] = MulticastSink("product-updated")


async def init_events() -> None:
    """Initialize event publishing infrastructure"""
    global _kafka_publisher, _product_event_producer

    settings = get_settings()
    if not settings.KAFKA_ENABLED:
        logger.info(
            "Kafka disabled: product events will not be published",
            extra={"operation": "init_events", "kafka_enabled": False},
        )
        return

    logger.info(
        "Initializing event publishing infrastructure",
        extra={
            "operation": "init_events",
            "kafka_servers": settings.KAFKA_BOOTSTRAP_SERVERS,
            "service_name": settings.SERVICE_NAME,
        },
    )

    _kafka_publisher = KafkaEventPublisher(
        bootstrap_servers=settings.KAFKA_BOOTSTRAP_SERVERS,
        client_id=f"{settings.SERVICE_NAME}-producer",
        max_retries=settings.KAFKA_CONNECT_MAX_RETRIES,
        retry_delay=settings.KAFKA_CONNECT_RETRY_DELAY,
        enable_graceful_degradation=True,
    )
    await _kafka_publisher.start(timeout=30.0)

    if _kafka_publisher.is_connected:
        await _kafka_publisher.ensure_topics(
            [
                TopicSpec(
                    name=settings.KAFKA_TOPIC_PRODUCT_EVENTS,
                    partitions=settings.KAFKA_TOPIC_PRODUCT_EVENTS_PARTITIONS,
                ),
                TopicSpec(name=settings.product_dlt_topic, partitions=1),
            ]
        )

    _product_event_producer = ProductEventProducer(
        _kafka_publisher, topic=settings.KAFKA_TOPIC_PRODUCT_EVENTS
    )

    logger.info(
        "Event publishing infrastructure initialized",
        extra={
            "operation": "init_events_complete",
            "connected": _kafka_publisher.is_connected,
            "degraded_mode": not _kafka_publisher.is_connected,
        },
    )


async def close_events() -> None:
    """Close event publishing infrastructure"""
    global _kafka_publisher, _product_event_producer

    try:
        if _kafka_publisher:
            logger.info(
                "Closing event publishing infrastructure",
                extra={"operation": "close_events"},
            )
            await _kafka_publisher.stop()
    finally:
        _kafka_publisher = None
        _product_event_producer = None


def get_event_producer() -> Optional[ProductEventProducer]:
    """Get the product event producer instance, None when Kafka is disabled"""
    return _product_event_producer


async def health_check_events() -> bool:
    """Check if event publishing is healthy"""
    if _kafka_publisher:
        return await _kafka_publisher.health_check()
    return False
