"""WebSocket connection manager.

Tracks open emergency-monitor connections per admin. Use via
app.state.ws_manager (set in lifespan).
"""

from __future__ import annotations

import asyncio

from fastapi import WebSocket


class ConnectionManager:
    """Registry of monitor connections, keyed by admin uid.

    Each connection owns its own live subscription; the manager only
    accepts, tracks and forgets sockets. Counts are lock-protected.
    """

    def __init__(self) -> None:
        self._connections_by_admin: dict[str, set[WebSocket]] = {}
        self._websocket_to_admin: dict[WebSocket, str] = {}
        self._lock = asyncio.Lock()

    async def connect(self, websocket: WebSocket, admin_uid: str) -> None:
        """Accept and register a new connection for the given admin."""
        await websocket.accept()
        async with self._lock:
            self._connections_by_admin.setdefault(admin_uid, set()).add(websocket)
            self._websocket_to_admin[websocket] = admin_uid

    async def disconnect(self, websocket: WebSocket) -> None:
        """Remove a connection (call on disconnect)."""
        async with self._lock:
            admin_uid = self._websocket_to_admin.pop(websocket, None)
            if admin_uid and admin_uid in self._connections_by_admin:
                conns = self._connections_by_admin[admin_uid]
                conns.discard(websocket)
                if not conns:
                    del self._connections_by_admin[admin_uid]

    async def get_connection_count(self) -> int:
        """Return the total number of active connections (lock-safe)."""
        async with self._lock:
            return sum(len(c) for c in self._connections_by_admin.values())

    async def get_admin_count(self) -> int:
        """Return how many distinct admins have a monitor open."""
        async with self._lock:
            return len(self._connections_by_admin)
