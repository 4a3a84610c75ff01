"""Firebase integration: Firestore REST client, document store, auth and storage."""

from byki_admin.infrastructure.firebase.client import (
    close_firebase,
    get_firestore_client,
    init_firebase,
)
from byki_admin.infrastructure.firebase.store import (
    DocumentStore,
    FieldFilter,
    OrderBy,
    StoredDocument,
)

__all__ = [
    "DocumentStore",
    "FieldFilter",
    "OrderBy",
    "StoredDocument",
    "close_firebase",
    "get_firestore_client",
    "init_firebase",
]
