"""Workshop entity: a partner service location."""

from dataclasses import dataclass, field
from datetime import datetime

from byki_admin.domain.enums import ServiceRegion, WorkshopPartnerType

WEEKDAYS = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)


def default_working_hours() -> dict[str, str]:
    """Opening hours assumed for workshops that never set their own."""
    hours = {day: "9:00 AM - 6:00 PM" for day in WEEKDAYS[:5]}
    hours["saturday"] = "9:00 AM - 2:00 PM"
    hours["sunday"] = "Closed"
    return hours


DEFAULT_SUPPORTED_CATEGORIES = ("Oil", "Brakes", "Filters", "Battery", "Tires")


@dataclass(frozen=True)
class Workshop:
    """Normalized workshop."""

    id: str
    created_at: datetime
    name: str = ""
    address: str = ""
    city: str | None = None
    state: str | None = None
    postcode: str | None = None
    latitude: float = 0
    longitude: float = 0
    phone: str = ""
    whatsapp: str | None = None
    email: str | None = None
    website: str | None = None
    rating: float = 0
    review_count: int = 0
    amenities: list[str] = field(default_factory=list)
    working_hours: dict[str, str] = field(default_factory=default_working_hours)
    services: list[str] = field(default_factory=list)
    specializations: list[str] = field(default_factory=list)
    image_url: str | None = None
    gallery_images: list[str] | None = None
    is_active: bool = True
    partner_type: WorkshopPartnerType = WorkshopPartnerType.PARTNER
    region: ServiceRegion = ServiceRegion.KLANG_VALLEY
    is_hq: bool = False
    google_maps_url: str | None = None
    google_place_id: str | None = None
    coverage_areas: list[str] = field(default_factory=list)
    max_daily_bookings: int = 10
    supported_categories: list[str] = field(
        default_factory=lambda: list(DEFAULT_SUPPORTED_CATEGORIES)
    )
