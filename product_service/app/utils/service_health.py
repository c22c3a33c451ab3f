"""
Product Service Health Check Utilities
======================================

Independent health check functionality for Product service.
No shared dependencies - completely self-contained.
"""

import time
from typing import Any, Awaitable, Callable, Dict, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ..core.database import get_database_manager

HealthCheck = Callable[[], Awaitable[Dict[str, Any]]]


class ProductServiceHealthChecker:
    """Product Service specific health checker"""

    def __init__(self, service_name: str = "product_service") -> None:
        self.service_name = service_name
        self.checks: Dict[str, HealthCheck] = {}
        self.start_time = time.time()

    def add_check(self, name: str, check_func: HealthCheck) -> None:
        """Add a health check function"""
        self.checks[name] = check_func

    async def run_checks(self) -> Dict[str, Any]:
        """Run all health checks and aggregate the overall status"""
        results = {}
        check_start_time = time.time()

        for name, check_func in self.checks.items():
            individual_start = time.time()
            result = await check_func()
            result["duration_ms"] = round((time.time() - individual_start) * 1000, 2)
            results[name] = result

        total_time = (time.time() - check_start_time) * 1000

        return {
            "service": self.service_name,
            "status": "healthy"
            if all(r.get("status") != "unhealthy" for r in results.values())
            else "unhealthy",
            "checks": results,
            "total_duration_ms": round(total_time, 2),
            "uptime_seconds": round(time.time() - self.start_time, 2),
            "timestamp": time.time(),
        }


async def _database_check() -> Dict[str, Any]:
    try:
        async with get_database_manager().async_session_maker() as session:
            await session.execute(text("SELECT 1"))
        return {"status": "healthy", "component": "database"}
    except SQLAlchemyError as e:
        return {"status": "unhealthy", "component": "database", "error": str(e)}


async def create_product_service_health_check(
    service_name: str = "product_service",
    version: str = "1.0.0",
    kafka_healthy: Optional[bool] = None,
) -> Dict[str, Any]:
    """
    Build the health report. Kafka being down degrades but does not fail the
    service, since events are then only logged.
    """
    health_checker = ProductServiceHealthChecker(service_name)

    async def basic_check() -> Dict[str, Any]:
        return {"status": "healthy", "version": version, "component": "core"}

    async def kafka_check() -> Dict[str, Any]:
        if kafka_healthy is None:
            return {"status": "disabled", "component": "kafka"}
        return {
            "status": "healthy" if kafka_healthy else "degraded",
            "component": "kafka",
        }

    health_checker.add_check("basic", basic_check)
    health_checker.add_check("database", _database_check)
    health_checker.add_check("kafka", kafka_check)
    return await health_checker.run_checks()
