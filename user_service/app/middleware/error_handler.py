import traceback
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from ..core.settings import get_settings
from ..utils.logging import setup_user_logging

logger = setup_user_logging("user_service_error_handler", get_settings().LOG_LEVEL)


def _error_response(
    request: Request, status_code: int, error_type: str, message: str
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": {
                "type": error_type,
                "message": message,
                "correlation_id": request.headers.get("X-Correlation-ID", "unknown"),
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "path": request.url.path,
                "method": request.method,
            }
        },
    )


def setup_user_error_handling(app: FastAPI) -> None:
    """Setup error handlers for the User Service."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(  # type: ignore
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(request, exc.status_code, "http_error", str(exc.detail))

    @app.exception_handler(Exception)
    async def general_exception_handler(  # type: ignore
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception occurred",
            extra={
                "path": request.url.path,
                "method": request.method,
                "exception_type": type(exc).__name__,
                "traceback": traceback.format_exc(),
            },
        )
        return _error_response(
            request, 500, "internal_server_error", "An internal server error occurred"
        )
