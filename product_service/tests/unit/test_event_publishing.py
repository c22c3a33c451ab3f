from unittest.mock import AsyncMock, Mock

import pytest
from aiokafka.errors import KafkaConnectionError

from product_service.app.events.base import EventPublisher
from product_service.app.events.base.kafka_client import KafkaEventPublisher
from product_service.app.events.event_producers import ProductEventProducer
from product_service.app.events.schemas import ProductEvent


class TestProductEvent:
    def test_serializes_with_camel_case_keys(self):
        event = ProductEvent(event_type="UPDATED", product_id=3)

        payload = event.to_dict()

        assert payload["eventType"] == "UPDATED"
        assert payload["productId"] == 3
        assert "timestamp" in payload
        assert "event_type" not in payload


class TestProductEventProducer:
    @pytest.fixture
    def publisher(self):
        publisher = Mock(spec=EventPublisher)
        publisher.publish = AsyncMock(return_value=True)
        return publisher

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "method, event_type",
        [
            ("publish_product_created", "CREATED"),
            ("publish_product_updated", "UPDATED"),
            ("publish_product_deleted", "DELETED"),
        ],
    )
    async def test_publishes_keyed_by_product_id(self, publisher, method, event_type):
        producer = ProductEventProducer(publisher, topic="product-events")

        event = await getattr(producer, method)(12)

        assert event.event_type == event_type
        assert event.product_id == 12
        publisher.publish.assert_awaited_once_with(
            event, topic="product-events", key="12"
        )

    @pytest.mark.asyncio
    async def test_undelivered_event_is_not_reported_as_sent(self, publisher, monkeypatch):
        logger = Mock()
        monkeypatch.setattr("product_service.app.events.event_producers.logger", logger)
        publisher.publish.return_value = False
        producer = ProductEventProducer(publisher, topic="product-events")

        await producer.publish_product_created(5)

        logger.info.assert_not_called()
        logger.warning.assert_called_once()
        assert "not delivered" in logger.warning.call_args.args[0]

    @pytest.mark.asyncio
    async def test_sent_event_is_logged_as_sent(self, publisher, monkeypatch):
        logger = Mock()
        monkeypatch.setattr("product_service.app.events.event_producers.logger", logger)
        producer = ProductEventProducer(publisher, topic="product-events")

        await producer.publish_product_updated(5)

        logger.warning.assert_not_called()
        assert logger.info.call_args.args[0] == (
            "Sent product updated event for product id: 5"
        )


class TestKafkaEventPublisher:
    @pytest.mark.asyncio
    async def test_publish_while_disconnected_degrades_gracefully(self):
        publisher = KafkaEventPublisher("localhost:9092", "test-producer")

        sent = await publisher.publish(
            ProductEvent(event_type="CREATED", product_id=1), topic="product-events"
        )

        assert sent is False
        assert publisher.is_connected is False

    @pytest.mark.asyncio
    async def test_publish_while_disconnected_raises_without_degradation(self):
        publisher = KafkaEventPublisher(
            "localhost:9092", "test-producer", enable_graceful_degradation=False
        )

        with pytest.raises(KafkaConnectionError):
            await publisher.publish(
                ProductEvent(event_type="CREATED", product_id=1),
                topic="product-events",
            )

    @pytest.mark.asyncio
    async def test_publish_sends_json_payload(self):
        publisher = KafkaEventPublisher("localhost:9092", "test-producer")
        publisher.producer = Mock()
        publisher.producer.send_and_wait = AsyncMock(
            return_value=Mock(partition=1, offset=10)
        )
        publisher.is_connected = True

        sent = await publisher.publish(
            ProductEvent(event_type="DELETED", product_id=4),
            topic="product-events",
            key="4",
        )

        assert sent is True
        kwargs = publisher.producer.send_and_wait.await_args.kwargs
        assert kwargs["topic"] == "product-events"
        assert kwargs["key"] == "4"
        assert kwargs["value"]["eventType"] == "DELETED"
        assert kwargs["value"]["productId"] == 4

    @pytest.mark.asyncio
    async def test_health_check_without_producer(self):
        publisher = KafkaEventPublisher("localhost:9092", "test-producer")

        assert await publisher.health_check() is False
