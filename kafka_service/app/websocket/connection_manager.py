"""
WebSocket connection registry for the events dashboard.

Every client connected to the events endpoint receives every broadcast;
clients that cannot be written to are dropped.
"""

import asyncio
from typing import List, Set

from fastapi import WebSocket, WebSocketDisconnect
from pydantic import BaseModel

from ..core.setting import get_settings
from ..utils.logging import setup_kafka_logging

logger = setup_kafka_logging("kafka_service.websocket", get_settings().LOG_LEVEL)


class ConnectionManager:
    def __init__(self) -> None:
        self.active_connections: Set[WebSocket] = set()
        self._lock = asyncio.Lock()

    @property
    def connection_count(self) -> int:
        return len(self.active_connections)

    async def connect(self, websocket: WebSocket) -> None:
        await websocket.accept()
        async with self._lock:
            self.active_connections.add(websocket)
        logger.info(
            "Dashboard client connected",
            extra={"connections": self.connection_count},
        )

    async def disconnect(self, websocket: WebSocket) -> None:
        async with self._lock:
            self.active_connections.discard(websocket)
        logger.info(
            "Dashboard client disconnected",
            extra={"connections": self.connection_count},
        )

    async def broadcast(self, event: BaseModel) -> int:
        """Send the event as JSON to every client; returns how many received it."""
        message = event.model_dump_json()
        async with self._lock:
            connections = list(self.active_connections)

        stale: List[WebSocket] = []
        for websocket in connections:
            try:
                await websocket.send_text(message)
            except (WebSocketDisconnect, RuntimeError, OSError) as e:
                logger.warning(
                    "Dropping dashboard client after failed send",
                    extra={"error": str(e)},
                )
                stale.append(websocket)

        if stale:
            async with self._lock:
                self.active_connections.difference_update(stale)

        return len(connections) - len(stale)
