import time
from typing import Any, Dict

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ...core.database import get_database_manager
from ...core.settings import get_settings

router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint for the user service."""
    settings = get_settings()
    try:
        async with get_database_manager().async_session_maker() as session:
            await session.execute(text("SELECT 1"))
        database = {"status": "healthy"}
    except SQLAlchemyError as e:
        database = {"status": "unhealthy", "error": str(e)}

    return {
        "service": settings.SERVICE_NAME,
        "status": database["status"],
        "version": settings.APP_VERSION,
        "checks": {"database": database},
        "timestamp": time.time(),
    }
