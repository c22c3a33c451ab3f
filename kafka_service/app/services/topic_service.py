from typing import List

from aiokafka.admin import AIOKafkaAdminClient  # type: ignore

from ..core.setting import get_settings
from ..utils.logging import setup_kafka_logging

logger = setup_kafka_logging("kafka_service.topics", get_settings().LOG_LEVEL)


class TopicService:
    """Reads topic metadata through a short-lived admin client"""

    def __init__(self, bootstrap_servers: str, client_id: str = "kafka-service-admin"):
        self.bootstrap_servers = bootstrap_servers
        self.client_id = client_id

    async def list_topics(self) -> List[str]:
        """Topic names, internal topics (leading underscore) excluded"""
        admin_client = AIOKafkaAdminClient(
            bootstrap_servers=self.bootstrap_servers, client_id=self.client_id
        )
        await admin_client.start()  # type: ignore
        try:
            topics = await admin_client.list_topics()
        finally:
            await admin_client.close()  # type: ignore

        names = sorted(name for name in topics if not name.startswith("_"))
        logger.debug("Listed Kafka topics", extra={"topics": len(names)})
        return names
