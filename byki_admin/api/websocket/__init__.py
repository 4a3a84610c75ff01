"""WebSocket connection manager for the live emergency monitor."""

from byki_admin.api.websocket.manager import ConnectionManager

__all__ = ["ConnectionManager"]
