from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.setting import get_settings
from ..utils.logging import setup_kafka_logging

logger = setup_kafka_logging("kafka_service.error_handler", get_settings().LOG_LEVEL)


def _error_body(request: Request, error_type: str, message: str) -> Dict[str, Any]:
    return {
        "error": {
            "type": error_type,
            "message": message,
            "correlation_id": request.headers.get("X-Correlation-ID", "unknown"),
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "path": request.url.path,
            "method": request.method,
        }
    }


def setup_kafka_error_handling(app: FastAPI) -> None:
    """Register the JSON error envelope for the Kafka Service."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(  # type: ignore
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, "http_error", str(exc.detail)),
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(  # type: ignore
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception occurred",
            exc_info=exc,
            extra={
                "path": request.url.path,
                "method": request.method,
                "exception_type": type(exc).__name__,
            },
        )
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request, "internal_server_error", "An internal server error occurred"
            ),
        )
