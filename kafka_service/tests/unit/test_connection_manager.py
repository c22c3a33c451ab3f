import json
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi import WebSocket, WebSocketDisconnect

from kafka_service.app.models.kafka_event import EventType, KafkaEvent
from kafka_service.app.websocket.connection_manager import ConnectionManager


def _socket(send_side_effect=None):
    websocket = Mock(spec=WebSocket)
    websocket.accept = AsyncMock()
    websocket.send_text = AsyncMock(side_effect=send_side_effect)
    return websocket


@pytest.fixture
def event():
    return KafkaEvent(
        topic="product-events", partition=0, offset=1, key="1",
        value='{"eventType":"CREATED"}', type=EventType.CREATED,
    )


class TestConnectionManager:
    @pytest.mark.asyncio
    async def test_broadcast_reaches_every_client(self, event):
        manager = ConnectionManager()
        first, second = _socket(), _socket()
        await manager.connect(first)
        await manager.connect(second)

        delivered = await manager.broadcast(event)

        assert delivered == 2
        first.accept.assert_awaited_once()
        sent = json.loads(first.send_text.await_args.args[0])
        assert sent["id"] == event.id
        assert sent["type"] == "CREATED"
        second.send_text.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_failed_client_is_dropped(self, event):
        manager = ConnectionManager()
        healthy = _socket()
        gone = _socket(send_side_effect=WebSocketDisconnect(code=1006))
        await manager.connect(healthy)
        await manager.connect(gone)

        assert await manager.broadcast(event) == 1
        assert manager.connection_count == 1

        assert await manager.broadcast(event) == 1
        assert gone.send_text.await_count == 1

    @pytest.mark.asyncio
    async def test_disconnect(self, event):
        manager = ConnectionManager()
        websocket = _socket()
        await manager.connect(websocket)

        await manager.disconnect(websocket)

        assert manager.connection_count == 0
        assert await manager.broadcast(event) == 0
