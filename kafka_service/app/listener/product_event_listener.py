"""
Product event listener
======================

Consumes the product topic and pushes every record to the dashboard's
WebSocket clients. Several consumers share one group so partitions are
processed concurrently; commits happen after each polled batch.
"""

import asyncio
import json
from typing import Any, List, Optional

from aiokafka import AIOKafkaConsumer  # type: ignore
from aiokafka.errors import KafkaConnectionError, KafkaError  # type: ignore
from aiokafka.structs import ConsumerRecord  # type: ignore

from ..core.setting import KafkaServiceSettings, get_settings
from ..models.kafka_event import KafkaEvent, parse_event_type
from ..utils.logging import setup_kafka_logging
from ..websocket.connection_manager import ConnectionManager
from .error_handler import DefaultErrorHandler, NonRetryableError

logger = setup_kafka_logging("kafka_service.listener", get_settings().LOG_LEVEL)


def _decode_key(key: Optional[bytes]) -> Optional[str]:
    return key.decode("utf-8", errors="replace") if key is not None else None


class ProductEventListener:
    def __init__(
        self,
        connection_manager: ConnectionManager,
        error_handler: DefaultErrorHandler,
        settings: Optional[KafkaServiceSettings] = None,
    ):
        self.connection_manager = connection_manager
        self.error_handler = error_handler
        self.settings = settings or get_settings()
        self.consumers: List[AIOKafkaConsumer] = []
        self._tasks: List["asyncio.Task[None]"] = []
        self.running = False

    def _create_consumer(self, index: int) -> AIOKafkaConsumer:
        return AIOKafkaConsumer(
            self.settings.KAFKA_TOPIC_PRODUCT_EVENTS,
            bootstrap_servers=self.settings.KAFKA_BOOTSTRAP_SERVERS,
            group_id=self.settings.KAFKA_GROUP_ID,
            client_id=f"{self.settings.SERVICE_NAME}-consumer-{index}",
            key_deserializer=_decode_key,
            auto_offset_reset=self.settings.KAFKA_AUTO_OFFSET_RESET,
            max_poll_records=self.settings.KAFKA_MAX_POLL_RECORDS,
            enable_auto_commit=False,
        )

    async def _start_consumer(self, consumer: AIOKafkaConsumer) -> bool:
        max_retries = self.settings.KAFKA_CONNECT_MAX_RETRIES
        retry_delay = self.settings.KAFKA_CONNECT_RETRY_DELAY
        for attempt in range(max_retries):
            try:
                await consumer.start()  # type: ignore
                return True
            except KafkaConnectionError as e:
                logger.warning(
                    f"Kafka consumer connection attempt {attempt + 1} failed: {e}",
                    extra={"attempt": attempt + 1, "max_retries": max_retries},
                )
                if attempt < max_retries - 1:
                    await asyncio.sleep(retry_delay * (2**attempt))
        return False

    async def start(self) -> None:
        """Start the consumers; without a broker the listener stays idle."""
        self.running = True
        for index in range(self.settings.KAFKA_LISTENER_CONCURRENCY):
            consumer = self._create_consumer(index)
            if not await self._start_consumer(consumer):
                logger.error(
                    "Failed to connect Kafka consumer after all retries. "
                    "Running in degraded mode (no event consumption)"
                )
                await self.stop()
                return
            self.consumers.append(consumer)
            self._tasks.append(asyncio.create_task(self._consume(consumer, index)))

        logger.info(
            "Product event listener started",
            extra={
                "topic": self.settings.KAFKA_TOPIC_PRODUCT_EVENTS,
                "group_id": self.settings.KAFKA_GROUP_ID,
                "concurrency": len(self.consumers),
                "max_poll_records": self.settings.KAFKA_MAX_POLL_RECORDS,
            },
        )

    async def stop(self) -> None:
        self.running = False
        for task in self._tasks:
            task.cancel()
        await asyncio.gather(*self._tasks, return_exceptions=True)
        self._tasks.clear()

        for consumer in self.consumers:
            try:
                await consumer.stop()  # type: ignore
            except KafkaError as e:
                logger.warning("Error stopping Kafka consumer", extra={"error": str(e)})
        self.consumers.clear()
        logger.info("Product event listener stopped")

    async def _consume(self, consumer: AIOKafkaConsumer, index: int) -> None:
        try:
            while self.running:
                batches = await consumer.getmany(timeout_ms=1000)  # type: ignore
                for records in batches.values():
                    for record in records:
                        await self.error_handler.process(record, self.on_record)
                if batches:
                    await consumer.commit()  # type: ignore
        except KafkaError as e:
            logger.error(
                "Kafka consumer error",
                exc_info=True,
                extra={"consumer": index, "error": str(e)},
            )
            self.running = False
        except Exception as e:
            logger.error(
                "Unexpected error in Kafka consumer",
                exc_info=True,
                extra={
                    "consumer": index,
                    "error_type": type(e).__name__,
                    "error": str(e),
                },
            )
            self.running = False

    async def on_record(self, record: ConsumerRecord) -> KafkaEvent:
        """Turn one product record into a dashboard event and broadcast it"""
        logger.debug(
            "Received Kafka event",
            extra={
                "topic": record.topic,
                "partition": record.partition,
                "offset": record.offset,
            },
        )
        try:
            payload: Any = json.loads(record.value)
        except (TypeError, ValueError) as e:
            raise NonRetryableError(f"Failed to deserialize record value: {e}") from e

        event_type = "UNKNOWN"
        if isinstance(payload, dict) and "eventType" in payload:
            event_type = str(payload["eventType"])

        event = KafkaEvent(
            topic=record.topic,
            partition=record.partition,
            offset=record.offset,
            key=record.key,
            value=json.dumps(payload, separators=(",", ":")),
            type=parse_event_type(event_type),
        )
        delivered = await self.connection_manager.broadcast(event)

        logger.debug(
            "Sent event to WebSocket",
            extra={"event_id": event.id, "type": event.type.value, "clients": delivered},
        )
        return event
