"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the shared document store, the domain
services built on it and the signed-in admin. Routes depend only on
these dependencies, not on infrastructure directly.
"""

from __future__ import annotations

from typing import Annotated, TypeVar

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from byki_admin.application.services import AnalyticsService, AuthService
from byki_admin.core.config import get_settings
from byki_admin.core.state import AppStateStore
from byki_admin.domain.entities import AdminUser
from byki_admin.domain.exceptions import (
    AppStateClosedException,
    ResourceNotFoundException,
    StoreNotConfiguredException,
)
from byki_admin.infrastructure.firebase.auth import FirebaseAuthClient
from byki_admin.infrastructure.firebase.services import (
    FirestoreBookingService,
    FirestoreEmergencyService,
    FirestoreFAQService,
    FirestoreNotificationService,
    FirestoreOrderService,
    FirestoreProductService,
    FirestoreReviewService,
    FirestoreSupportService,
    FirestoreUserService,
    FirestoreVoucherService,
    FirestoreWorkshopService,
)
from byki_admin.infrastructure.firebase.storage import FirebaseStorageClient
from byki_admin.infrastructure.firebase.store import DocumentStore
from byki_admin.infrastructure.security.jwt import SessionClaims, read_session_token

_http_bearer = HTTPBearer(auto_error=False)

T = TypeVar("T")


def get_document_store(request: Request) -> DocumentStore:
    """Shared DocumentStore; 503 when Firestore credentials are not configured."""
    store = getattr(request.app.state, "document_store", None)
    if store is None:
        raise StoreNotConfiguredException()
    return store


def get_storage(request: Request) -> FirebaseStorageClient | None:
    """Image storage client, or None when no bucket is configured."""
    return getattr(request.app.state, "storage", None)


def get_app_state_store(request: Request) -> AppStateStore:
    store = getattr(request.app.state, "app_state", None)
    if store is None:
        raise AppStateClosedException()
    return store


def get_auth_client(request: Request) -> FirebaseAuthClient:
    client = getattr(request.app.state, "auth_client", None)
    if client is None:
        raise HTTPException(
            status_code=503,
            detail="Sign-in is not configured (FIREBASE_WEB_API_KEY is not set).",
        )
    return client


StoreDep = Annotated[DocumentStore, Depends(get_document_store)]


# ---- Domain services ----


def get_order_service(store: StoreDep) -> FirestoreOrderService:
    return FirestoreOrderService(store, get_settings().tz)


def get_booking_service(store: StoreDep) -> FirestoreBookingService:
    return FirestoreBookingService(store, get_settings().tz)


def get_emergency_service(store: StoreDep) -> FirestoreEmergencyService:
    return FirestoreEmergencyService(store, get_settings().tz)


def get_support_service(store: StoreDep) -> FirestoreSupportService:
    return FirestoreSupportService(store)


def get_product_service(
    store: StoreDep,
    storage: Annotated[FirebaseStorageClient | None, Depends(get_storage)],
) -> FirestoreProductService:
    return FirestoreProductService(
        store, storage, low_stock_threshold=get_settings().low_stock_threshold
    )


def get_voucher_service(store: StoreDep) -> FirestoreVoucherService:
    return FirestoreVoucherService(store)


def get_workshop_service(store: StoreDep) -> FirestoreWorkshopService:
    return FirestoreWorkshopService(store)


def get_user_service(store: StoreDep) -> FirestoreUserService:
    return FirestoreUserService(store, get_settings().tz)


def get_review_service(store: StoreDep) -> FirestoreReviewService:
    return FirestoreReviewService(store)


def get_faq_service(store: StoreDep) -> FirestoreFAQService:
    return FirestoreFAQService(store)


def get_notification_service(store: StoreDep) -> FirestoreNotificationService:
    return FirestoreNotificationService(store, get_settings().tz)


def get_analytics_service(
    orders: Annotated[FirestoreOrderService, Depends(get_order_service)],
    bookings: Annotated[FirestoreBookingService, Depends(get_booking_service)],
    users: Annotated[FirestoreUserService, Depends(get_user_service)],
    emergencies: Annotated[FirestoreEmergencyService, Depends(get_emergency_service)],
    support: Annotated[FirestoreSupportService, Depends(get_support_service)],
    products: Annotated[FirestoreProductService, Depends(get_product_service)],
) -> AnalyticsService:
    return AnalyticsService(orders, bookings, users, emergencies, support, products)


def get_auth_service(
    auth_client: Annotated[FirebaseAuthClient, Depends(get_auth_client)],
    users: Annotated[FirestoreUserService, Depends(get_user_service)],
) -> AuthService:
    return AuthService(auth_client, users)


# ---- Authentication ----


def session_for_token(app_state: AppStateStore, token: str) -> SessionClaims | None:
    """Claims of ``token`` when its session is still signed in, else None."""
    claims = read_session_token(token)
    if claims is None:
        return None
    auth = app_state.session(claims.session_id)
    if auth is None or auth.user is None or auth.user.uid != claims.admin.uid:
        return None
    return SessionClaims(session_id=claims.session_id, admin=auth.user)


async def get_current_session(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    app_state: Annotated[AppStateStore, Depends(get_app_state_store)],
) -> SessionClaims:
    """Session of the bearer JWT; raise 401 if missing, invalid or signed out."""
    claims = session_for_token(app_state, credentials.credentials) if credentials else None
    if claims is None:
        raise HTTPException(status_code=401, detail="Not authenticated")
    return claims


CurrentSession = Annotated[SessionClaims, Depends(get_current_session)]


async def get_current_admin(session: CurrentSession) -> AdminUser:
    return session.admin


CurrentAdmin = Annotated[AdminUser, Depends(get_current_admin)]


def require_found(value: T | None, resource_type: str, resource_id: str) -> T:
    """Return ``value``; raise ResourceNotFoundException (404) when it is None."""
    if value is None:
        raise ResourceNotFoundException(resource_type, resource_id)
    return value
