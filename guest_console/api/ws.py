"""
WebSocket feed of check-ins for organizer consoles
"""

import json
import logging
from typing import Dict, List
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from guest_console.core.config import settings
from guest_console.utils.security import tokens_match

logger = logging.getLogger(__name__)

class WebSocketManager:
    """Manages WebSocket connections, one room per wedding"""

    def __init__(self):
        # wedding_id -> list of websockets
        self.active_connections: Dict[str, List[WebSocket]] = {}

    async def connect(self, websocket: WebSocket, wedding_id: str):
        """Accept WebSocket connection and add to wedding room"""
        await websocket.accept()
        self.active_connections.setdefault(wedding_id, []).append(websocket)
        logger.info(f"Console connected to wedding {wedding_id}. Total connections: {len(self.active_connections[wedding_id])}")

    def disconnect(self, websocket: WebSocket, wedding_id: str):
        """Remove WebSocket connection from wedding room"""
        connections = self.active_connections.get(wedding_id)
        if not connections or websocket not in connections:
            return
        connections.remove(websocket)
        logger.info(f"Console disconnected from wedding {wedding_id}. Remaining connections: {len(connections)}")
        if not connections:
            del self.active_connections[wedding_id]

    async def send_personal_message(self, message: dict, websocket: WebSocket):
        """Send message to specific WebSocket"""
        try:
            await websocket.send_text(json.dumps(message))
        except Exception as e:
            logger.error(f"Error sending personal message: {e}")

    async def broadcast_to_wedding(self, wedding_id: str, message: dict):
        """Broadcast message to every console watching a wedding"""
        connections = list(self.active_connections.get(wedding_id, []))
        if not connections:
            logger.debug(f"No active consoles for wedding {wedding_id}")
            return

        disconnected = []
        for websocket in connections:
            try:
                await websocket.send_text(json.dumps(message))
            except Exception as e:
                logger.error(f"Error broadcasting to websocket: {e}")
                disconnected.append(websocket)

        for websocket in disconnected:
            self.disconnect(websocket, wedding_id)

    def get_connection_count(self, wedding_id: str) -> int:
        """Get number of active connections for a wedding"""
        return len(self.active_connections.get(wedding_id, []))

# Global WebSocket manager instance
websocket_manager = WebSocketManager()

router = APIRouter()

@router.websocket("/weddings/{wedding_id}")
async def websocket_endpoint(websocket: WebSocket, wedding_id: str, token: str = ""):
    """Live check-in feed; organizers authenticate with ?token=ADMIN_TOKEN"""
    if not tokens_match(token, settings.ADMIN_TOKEN):
        await websocket.close(code=4001, reason="Invalid admin token")
        return
    if wedding_id != settings.WEDDING_ID:
        await websocket.close(code=4004, reason="Wedding not found")
        return

    await websocket_manager.connect(websocket, wedding_id)

    try:
        await websocket_manager.send_personal_message({
            "type": "connection",
            "wedding_id": wedding_id,
            "connection_count": websocket_manager.get_connection_count(wedding_id)
        }, websocket)

        while True:
            data = await websocket.receive_text()
            try:
                client_message = json.loads(data)
            except json.JSONDecodeError:
                logger.warning(f"Invalid JSON received from WebSocket: {data}")
                continue

            if client_message.get("type") == "ping":
                await websocket_manager.send_personal_message({
                    "type": "pong",
                    "timestamp": client_message.get("timestamp")
                }, websocket)

    except WebSocketDisconnect:
        pass
    finally:
        websocket_manager.disconnect(websocket, wedding_id)
