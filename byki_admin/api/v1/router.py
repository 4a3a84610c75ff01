"""API v1 router aggregation.

Health and auth are open; every data router requires an admin bearer
token. The WebSocket router authenticates per connection instead.
"""

from fastapi import APIRouter, Depends

from byki_admin.api.v1.dependencies import get_current_admin
from byki_admin.api.v1.endpoints import (
    analytics,
    auth,
    bookings,
    emergencies,
    faqs,
    health,
    notifications,
    orders,
    products,
    reviews,
    support,
    ui,
    users,
    vouchers,
    websocket as ws_endpoint,
    workshops,
)

_admin_only = [Depends(get_current_admin)]

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(
    orders.router, prefix="/orders", tags=["orders"], dependencies=_admin_only
)
api_router.include_router(
    bookings.router, prefix="/bookings", tags=["bookings"], dependencies=_admin_only
)
api_router.include_router(
    emergencies.router,
    prefix="/emergencies",
    tags=["emergencies"],
    dependencies=_admin_only,
)
api_router.include_router(
    support.router, prefix="/support", tags=["support"], dependencies=_admin_only
)
api_router.include_router(
    products.router, prefix="/products", tags=["products"], dependencies=_admin_only
)
api_router.include_router(
    vouchers.router, prefix="/vouchers", tags=["vouchers"], dependencies=_admin_only
)
api_router.include_router(
    workshops.router, prefix="/workshops", tags=["workshops"], dependencies=_admin_only
)
api_router.include_router(
    users.router, prefix="/users", tags=["users"], dependencies=_admin_only
)
api_router.include_router(
    reviews.router, prefix="/reviews", tags=["reviews"], dependencies=_admin_only
)
api_router.include_router(
    faqs.router, prefix="/faqs", tags=["faqs"], dependencies=_admin_only
)
api_router.include_router(
    notifications.router,
    prefix="/notifications",
    tags=["notifications"],
    dependencies=_admin_only,
)
api_router.include_router(
    analytics.router, prefix="/analytics", tags=["analytics"], dependencies=_admin_only
)
api_router.include_router(ui.router, prefix="/ui", tags=["ui"], dependencies=_admin_only)
api_router.include_router(ws_endpoint.router, prefix="/ws", tags=["websocket"])
