"""Firestore-backed domain services, one module per collection family."""

from byki_admin.infrastructure.firebase.services.booking_service_firestore import (
    FirestoreBookingService,
)
from byki_admin.infrastructure.firebase.services.emergency_service_firestore import (
    FirestoreEmergencyService,
)
from byki_admin.infrastructure.firebase.services.faq_service_firestore import (
    FirestoreFAQService,
)
from byki_admin.infrastructure.firebase.services.notification_service_firestore import (
    FirestoreNotificationService,
)
from byki_admin.infrastructure.firebase.services.order_service_firestore import (
    FirestoreOrderService,
)
from byki_admin.infrastructure.firebase.services.product_service_firestore import (
    FirestoreProductService,
)
from byki_admin.infrastructure.firebase.services.review_service_firestore import (
    FirestoreReviewService,
)
from byki_admin.infrastructure.firebase.services.support_service_firestore import (
    FirestoreSupportService,
)
from byki_admin.infrastructure.firebase.services.user_service_firestore import (
    FirestoreUserService,
)
from byki_admin.infrastructure.firebase.services.voucher_service_firestore import (
    FirestoreVoucherService,
)
from byki_admin.infrastructure.firebase.services.workshop_service_firestore import (
    FirestoreWorkshopService,
)

__all__ = [
    "FirestoreBookingService",
    "FirestoreEmergencyService",
    "FirestoreFAQService",
    "FirestoreNotificationService",
    "FirestoreOrderService",
    "FirestoreProductService",
    "FirestoreReviewService",
    "FirestoreSupportService",
    "FirestoreUserService",
    "FirestoreVoucherService",
    "FirestoreWorkshopService",
]
