import time
from typing import Any, Dict

from fastapi import APIRouter

from ...core.kafka_management import get_connection_manager, is_listener_running
from ...core.setting import get_settings

router = APIRouter()

_started_at = time.time()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint for the kafka service."""
    settings = get_settings()
    listener_running = is_listener_running()

    if listener_running is None:
        kafka_status = "disabled"
    else:
        kafka_status = "healthy" if listener_running else "degraded"

    return {
        "service": settings.SERVICE_NAME,
        "status": "healthy",
        "version": settings.APP_VERSION,
        "checks": {
            "kafka_listener": {"status": kafka_status},
            "websocket": {
                "status": "healthy",
                "connections": get_connection_manager().connection_count,
            },
        },
        "uptime_seconds": round(time.time() - _started_at, 2),
        "timestamp": time.time(),
    }
