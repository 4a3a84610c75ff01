"""WebSocket API schemas."""

from pydantic import BaseModel, Field


class WebSocketStatusResponse(BaseModel):
    """Response for GET /ws/status."""

    total_connections: int = Field(..., description="Number of open emergency monitors")
    admins: int = Field(..., description="Distinct admins with a monitor open")
