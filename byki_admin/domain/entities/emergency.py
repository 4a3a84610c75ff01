"""Emergency (roadside assistance) request entity."""

from dataclasses import dataclass
from datetime import datetime

from byki_admin.domain.enums import EmergencyStatus, EmergencyType


@dataclass(frozen=True)
class EmergencyRequest:
    """Normalized emergency request.

    ``user_name``/``user_phone`` are denormalized copies that may be missing;
    enrichment fills them from ``users/{user_id}``.
    """

    id: str
    user_id: str
    created_at: datetime
    updated_at: datetime
    user_name: str | None = None
    user_phone: str | None = None
    vehicle_id: str | None = None
    vehicle_info: str | None = None
    type: EmergencyType = EmergencyType.OTHER
    status: EmergencyStatus = EmergencyStatus.PENDING
    latitude: float = 0
    longitude: float = 0
    address: str = ""
    description: str | None = None
    mechanic_id: str | None = None
    mechanic_name: str | None = None
    estimated_arrival: datetime | None = None
    dispatched_at: datetime | None = None
    arrived_at: datetime | None = None
    completed_at: datetime | None = None
