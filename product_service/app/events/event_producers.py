"""
Product Service Event Producers
==============================

Publishes product lifecycle events (created, updated, deleted) to the
product topic so that downstream consumers can fan them out.
"""

from typing import Optional

from ..core.setting import get_settings
from ..utils.logging import setup_product_logging as setup_logging
from .base import EventPublisher
from .schemas import PRODUCT_CREATED, PRODUCT_DELETED, PRODUCT_UPDATED, ProductEvent

settings = get_settings()
logger = setup_logging("product_service.events.producers", log_level=settings.LOG_LEVEL)


class ProductEventProducer:
    """
    Product service event producer.
    Events are keyed by product id so that all changes of one product land
    on the same partition.
    """

    def __init__(self, publisher: EventPublisher, topic: Optional[str] = None):
        self.publisher = publisher
        self.topic = topic or settings.KAFKA_TOPIC_PRODUCT_EVENTS

    async def publish_product_created(self, product_id: int) -> ProductEvent:
        """Publish product created event"""
        return await self._publish(PRODUCT_CREATED, product_id)

    async def publish_product_updated(self, product_id: int) -> ProductEvent:
        """Publish product updated event"""
        return await self._publish(PRODUCT_UPDATED, product_id)

    async def publish_product_deleted(self, product_id: int) -> ProductEvent:
        """Publish product deleted event"""
        return await self._publish(PRODUCT_DELETED, product_id)

    async def _publish(self, event_type: str, product_id: int) -> ProductEvent:
        event = ProductEvent(event_type=event_type, product_id=product_id)
        sent = await self.publisher.publish(event, topic=self.topic, key=str(product_id))
        if sent:
            logger.info(
                f"Sent product {event_type.lower()} event for product id: {product_id}",
                extra={"product_id": product_id, "event_type": event_type},
            )
        else:
            logger.warning(
                f"Product {event_type.lower()} event for product id: {product_id} "
                "was not delivered to Kafka",
                extra={"product_id": product_id, "event_type": event_type},
            )
        return event
