import json
from unittest.mock import AsyncMock, Mock

import pytest

from kafka_service.app.core.setting import KafkaServiceSettings
from kafka_service.app.listener.error_handler import DefaultErrorHandler, NonRetryableError
from kafka_service.app.listener.product_event_listener import (
    ProductEventListener,
    _decode_key,
)
from kafka_service.app.models.kafka_event import EventType, KafkaEvent
from kafka_service.app.websocket.connection_manager import ConnectionManager


class TestProductEventListener:
    @pytest.fixture
    def connection_manager(self):
        manager = Mock(spec=ConnectionManager)
        manager.broadcast = AsyncMock(return_value=2)
        return manager

    @pytest.fixture
    def listener(self, connection_manager):
        return ProductEventListener(
            connection_manager,
            Mock(spec=DefaultErrorHandler),
            KafkaServiceSettings(KAFKA_ENABLED=True),
        )

    @pytest.mark.asyncio
    async def test_record_becomes_broadcast_event(
        self, listener, connection_manager, record_factory
    ):
        payload = {"eventType": "UPDATED", "productId": 3, "timestamp": "2024-01-01T00:00:00"}
        record = record_factory(json.dumps(payload).encode(), key="3", partition=1, offset=7)

        event = await listener.on_record(record)

        assert isinstance(event, KafkaEvent)
        assert event.topic == "product-events"
        assert event.partition == 1
        assert event.offset == 7
        assert event.key == "3"
        assert event.type is EventType.UPDATED
        assert json.loads(event.value) == payload
        connection_manager.broadcast.assert_awaited_once_with(event)

    @pytest.mark.asyncio
    async def test_missing_event_type_defaults_to_created(self, listener, record_factory):
        event = await listener.on_record(record_factory(b'{"productId": 1}'))

        assert event.type is EventType.CREATED

    @pytest.mark.asyncio
    async def test_unknown_event_type_defaults_to_created(self, listener, record_factory):
        event = await listener.on_record(record_factory(b'{"eventType": "ARCHIVED"}'))

        assert event.type is EventType.CREATED

    @pytest.mark.asyncio
    async def test_undecodable_value_is_not_retryable(
        self, listener, connection_manager, record_factory
    ):
        with pytest.raises(NonRetryableError):
            await listener.on_record(record_factory(b"{broken"))

        connection_manager.broadcast.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_value_is_not_retryable(self, listener, record_factory):
        with pytest.raises(NonRetryableError):
            await listener.on_record(record_factory(None))

    def test_consumers_join_one_group(self, listener, monkeypatch):
        consumer_class = Mock()
        monkeypatch.setattr(
            "kafka_service.app.listener.product_event_listener.AIOKafkaConsumer",
            consumer_class,
        )

        listener._create_consumer(2)

        args, kwargs = consumer_class.call_args
        assert args == ("product-events",)
        assert kwargs["group_id"] == "kafka-ui-group"
        assert kwargs["max_poll_records"] == 500
        assert kwargs["auto_offset_reset"] == "earliest"
        assert kwargs["enable_auto_commit"] is False

    @pytest.mark.asyncio
    async def test_degraded_start_without_broker(self, listener, monkeypatch):
        monkeypatch.setattr(
            "kafka_service.app.listener.product_event_listener.AIOKafkaConsumer",
            Mock(),
        )
        listener._start_consumer = AsyncMock(return_value=False)

        await listener.start()

        assert listener.running is False
        assert listener.consumers == []

    @pytest.mark.asyncio
    async def test_consume_processes_batch_then_commits(self, listener, record_factory):
        record = record_factory(b'{"eventType": "DELETED", "productId": 9}')
        consumer = Mock()

        async def getmany(timeout_ms):
            listener.running = False
            return {"product-events-0": [record]}

        consumer.getmany = getmany
        consumer.commit = AsyncMock()
        listener.error_handler.process = AsyncMock(return_value=True)
        listener.running = True

        await listener._consume(consumer, 0)

        listener.error_handler.process.assert_awaited_once_with(
            record, listener.on_record
        )
        consumer.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_consume_stops_listener_on_unexpected_error(self, listener):
        consumer = Mock()

        async def getmany(timeout_ms):
            return b"\xff".decode("utf-8")

        consumer.getmany = getmany
        consumer.commit = AsyncMock()
        listener.running = True

        await listener._consume(consumer, 0)

        assert listener.running is False
        consumer.commit.assert_not_called()

    def test_invalid_utf8_key_is_decoded_leniently(self):
        assert _decode_key(b"\xffid") == "\ufffdid"
        assert _decode_key(None) is None
