"""FastAPI dependency injection for Kafka Service"""

from fastapi import Depends

from ..core.kafka_management import get_connection_manager
from ..core.setting import get_settings
from ..services.topic_service import TopicService
from ..websocket.connection_manager import ConnectionManager


def get_topic_service() -> TopicService:
    settings = get_settings()
    return TopicService(
        settings.KAFKA_BOOTSTRAP_SERVERS, client_id=f"{settings.SERVICE_NAME}-admin"
    )


def get_dashboard_connections() -> ConnectionManager:
    return get_connection_manager()


TopicServiceDep = Depends(get_topic_service)
ConnectionManagerDep = Depends(get_dashboard_connections)
