from typing import Any, Dict

from fastapi import APIRouter

from ...core.event_management import health_check_events
from ...core.setting import get_settings
from ...utils.service_health import create_product_service_health_check

router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint for the product service."""
    settings = get_settings()
    kafka_healthy = await health_check_events() if settings.KAFKA_ENABLED else None
    return await create_product_service_health_check(
        settings.SERVICE_NAME, settings.APP_VERSION, kafka_healthy=kafka_healthy
    )
