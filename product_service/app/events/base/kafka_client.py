import asyncio
import json
from typing import Iterable, Optional

from aiokafka import AIOKafkaProducer  # type: ignore
from aiokafka.admin import AIOKafkaAdminClient, NewTopic  # type: ignore
from aiokafka.errors import KafkaConnectionError, KafkaError  # type: ignore
from pydantic import BaseModel

from ...core.setting import get_settings
from ...utils.logging import setup_product_logging as setup_logging
from . import EventPublisher

logger = setup_logging(
    "product_service.events.kafka", log_level=get_settings().LOG_LEVEL
)


class TopicSpec(BaseModel):
    """Topic to declare on startup"""

    name: str
    partitions: int = 1
    replicas: int = 1


class KafkaEventPublisher(EventPublisher):
    """
    Product Service Kafka publisher with connection retry logic
    """

    def __init__(
        self,
        bootstrap_servers: str,
        client_id: str,
        max_retries: int = 5,
        retry_delay: float = 2.0,
        enable_graceful_degradation: bool = True,
    ):
        self.bootstrap_servers = bootstrap_servers
        self.client_id = client_id
        self.max_retries = max_retries
        self.retry_delay = retry_delay
        self.enable_graceful_degradation = enable_graceful_degradation
        self.producer: Optional[AIOKafkaProducer] = None
        self.is_connected = False
        self._connection_lock = asyncio.Lock()

    async def ensure_topics(self, topics: Iterable[TopicSpec]) -> None:
        """Create any of the given topics that do not exist yet."""
        admin_client = AIOKafkaAdminClient(
            bootstrap_servers=self.bootstrap_servers,
            client_id=f"{self.client_id}-admin",
        )
        await admin_client.start()  # type: ignore
        try:
            existing = set(await admin_client.list_topics())
            missing = [
                NewTopic(
                    name=topic.name,
                    num_partitions=topic.partitions,
                    replication_factor=topic.replicas,
                )
                for topic in topics
                if topic.name not in existing
            ]
            if missing:
                await admin_client.create_topics(missing)
                logger.info(
                    "Created Kafka topics",
                    extra={
                        "topics": [topic.name for topic in missing],
                        "operation": "create_topics",
                    },
                )
        except KafkaError as e:
            logger.warning(
                "Error ensuring Kafka topics exist",
                extra={"error": str(e), "operation": "ensure_topics"},
            )
        finally:
            await admin_client.close()  # type: ignore

    async def start(self, timeout: float = 30.0) -> None:
        """Start Kafka producer with retry logic"""
        async with self._connection_lock:
            if self.producer and self.is_connected:
                return

            self.producer = AIOKafkaProducer(
                bootstrap_servers=self.bootstrap_servers,
                client_id=self.client_id,
                value_serializer=lambda x: json.dumps(x, default=str).encode("utf-8"),
                key_serializer=lambda x: x.encode("utf-8") if x else None,
                retry_backoff_ms=1000,
                request_timeout_ms=30000,
            )

            # Retry connection with exponential backoff
            for attempt in range(self.max_retries):
                try:
                    logger.info(
                        "Attempting Kafka connection",
                        extra={
                            "attempt": attempt + 1,
                            "max_retries": self.max_retries,
                            "operation": "kafka_connect",
                        },
                    )
                    await asyncio.wait_for(self.producer.start(), timeout=timeout)
                    self.is_connected = True
                    logger.info("Successfully connected to Kafka")
                    return

                except (KafkaConnectionError, asyncio.TimeoutError) as e:
                    delay = self.retry_delay * (2**attempt)
                    if attempt < self.max_retries - 1:
                        logger.warning(
                            f"Kafka connection attempt {attempt + 1} failed: {e}. "
                            f"Retrying in {delay} seconds..."
                        )
                        await asyncio.sleep(delay)
                    else:
                        logger.error(
                            f"Failed to connect to Kafka after {self.max_retries} "
                            "attempts. Running in degraded mode (events will be "
                            "logged but not published)"
                        )
                        self.is_connected = False

    async def stop(self) -> None:
        """Stop Kafka producer"""
        async with self._connection_lock:
            if self.producer:
                try:
                    await self.producer.stop()
                    logger.info("Kafka producer stopped")
                except KafkaError as e:
                    logger.warning(
                        "Error stopping Kafka producer",
                        extra={"error": str(e), "operation": "stop_producer"},
                    )
                finally:
                    self.producer = None
                    self.is_connected = False

    async def publish(
        self, event: BaseModel, topic: str, key: Optional[str] = None
    ) -> bool:
        """Publish event with fallback handling; returns whether Kafka accepted it"""
        payload = event.model_dump(mode="json", by_alias=True)

        if not self.is_connected or not self.producer:
            if self.enable_graceful_degradation:
                logger.warning(
                    "Kafka not available, logging event instead",
                    extra={"topic": topic, "event_data": payload},
                )
                return False
            raise KafkaConnectionError("Kafka producer not connected")

        try:
            metadata = await self.producer.send_and_wait(
                topic=topic, value=payload, key=key
            )
            logger.info(
                "Published event to Kafka topic",
                extra={
                    "topic": topic,
                    "key": key,
                    "partition": metadata.partition,
                    "offset": metadata.offset,
                    "operation": "publish_event",
                },
            )
            return True

        except KafkaError as e:
            if self.enable_graceful_degradation:
                logger.error(
                    f"Failed to publish event, logging instead: {e}",
                    extra={"topic": topic, "event_data": payload},
                )
                return False
            else:
                logger.error(
                    "Failed to publish event to Kafka",
                    extra={
                        "topic": topic,
                        "error": str(e),
                        "operation": "publish_event_failed",
                    },
                )
                raise

    async def health_check(self) -> bool:
        """Check if Kafka connection is healthy"""
        if not self.producer or not self.is_connected:
            return False
        try:
            # Try to get cluster metadata as health check
            metadata = await self.producer.client.fetch_all_metadata()
            return len(metadata.brokers()) > 0
        except KafkaError as e:
            logger.warning(
                "Kafka health check failed",
                extra={"error": str(e), "operation": "health_check"},
            )
            return False
