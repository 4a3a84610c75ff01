"""Firestore collection names (schema-in-code).

Firestore has no DDL or migrations. The mobile app and this dashboard share
these collections, so the names must match the app exactly. Use these
constants so collection names stay consistent.

Example:
    from byki_admin.infrastructure.firebase.collections import COLLECTION_ORDERS

    orders = await store.list(COLLECTION_ORDERS, order_by=OrderBy("createdAt", "desc"))
"""

COLLECTION_ORDERS = "orders"
COLLECTION_BOOKINGS = "bookings"
COLLECTION_EMERGENCY_REQUESTS = "emergency_requests"
COLLECTION_SUPPORT_TICKETS = "support_tickets"

# Catalog
COLLECTION_PRODUCTS = "products"
COLLECTION_PRODUCT_CATEGORIES = "product_categories"
COLLECTION_VOUCHERS = "vouchers"
COLLECTION_WORKSHOPS = "workshops"

# Accounts
COLLECTION_USERS = "users"
COLLECTION_LOYALTY_ACCOUNTS = "loyalty_accounts"
# Sub-collections under users/{uid}
SUBCOLLECTION_VEHICLES = "vehicles"
SUBCOLLECTION_ADDRESSES = "addresses"

# Content
COLLECTION_REVIEWS = "reviews"
COLLECTION_FAQS = "faqs"
COLLECTION_FAQ_CATEGORIES = "faq_categories"
COLLECTION_NOTIFICATIONS = "notifications"


def user_subcollection(user_id: str, name: str) -> str:
    """Path of a sub-collection owned by a user (e.g. ``users/u1/vehicles``)."""
    return f"{COLLECTION_USERS}/{user_id}/{name}"
