from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from ..core.setting import get_settings
from ..websocket.connection_manager import ConnectionManager
from .dependencies import ConnectionManagerDep

router = APIRouter()


@router.websocket(get_settings().WEBSOCKET_EVENTS_PATH)
async def events_socket(
    websocket: WebSocket, manager: ConnectionManager = ConnectionManagerDep
) -> None:
    """Push every consumed product event to this client until it disconnects"""
    await manager.connect(websocket)
    try:
        # Clients only listen; inbound frames are read to detect disconnects
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        await manager.disconnect(websocket)
