"""Backfill of denormalized user fields on emergencies and support tickets.

Records written by older app versions may lack the user's display name,
phone or email. Each distinct user is fetched once; a failed lookup is
logged and leaves that record's fields blank. Values already present on a
record are never overwritten, so enriching twice is the same as once.
"""

import asyncio
import logging
from collections.abc import Iterable, Sequence
from dataclasses import replace
from typing import Any

from byki_admin.domain.entities import EmergencyRequest, SupportTicket
from byki_admin.infrastructure.firebase.collections import COLLECTION_USERS
from byki_admin.infrastructure.firebase.normalization import (
    FIELD_ALIASES,
    as_optional_str,
    resolve_field,
)
from byki_admin.infrastructure.firebase.store import DocumentStore

logger = logging.getLogger(__name__)

_USER_ALIASES = {alias.canonical: alias for alias in FIELD_ALIASES["user"]}


async def _fetch_user(store: DocumentStore, user_id: str) -> dict[str, Any] | None:
    try:
        doc = await store.get(COLLECTION_USERS, user_id)
    except Exception:
        logger.exception("Failed to fetch user %s for enrichment", user_id)
        return None
    return doc.data if doc else None


async def fetch_user_profiles(
    store: DocumentStore, user_ids: Iterable[str]
) -> dict[str, dict[str, Any]]:
    """Fetch each distinct user once, concurrently. Missing or failed users are omitted."""
    ids = list(dict.fromkeys(uid for uid in user_ids if uid))
    if not ids:
        return {}
    results = await asyncio.gather(*(_fetch_user(store, uid) for uid in ids))
    return {uid: data for uid, data in zip(ids, results) if data is not None}


def profile_name(user: dict[str, Any]) -> str:
    return resolve_field(user, _USER_ALIASES["name"]) or "User"


def profile_phone(user: dict[str, Any]) -> str | None:
    return as_optional_str(resolve_field(user, _USER_ALIASES["phone"]))


async def enrich_emergencies(
    store: DocumentStore, emergencies: Sequence[EmergencyRequest]
) -> list[EmergencyRequest]:
    """Fill user_name (and user_phone when absent) for requests missing a name."""
    needing = [e for e in emergencies if e.user_id and not e.user_name]
    if not needing:
        return list(emergencies)
    profiles = await fetch_user_profiles(store, (e.user_id for e in needing))
    enriched = []
    for emergency in emergencies:
        user = profiles.get(emergency.user_id)
        if emergency.user_name or user is None:
            enriched.append(emergency)
            continue
        enriched.append(
            replace(
                emergency,
                user_name=profile_name(user),
                user_phone=emergency.user_phone or profile_phone(user),
            )
        )
    return enriched


async def enrich_tickets(
    store: DocumentStore, tickets: Sequence[SupportTicket]
) -> list[SupportTicket]:
    """Fill user_name/user_email for tickets that have neither."""
    needing = [t for t in tickets if t.user_id and not t.user_name and not t.user_email]
    if not needing:
        return list(tickets)
    profiles = await fetch_user_profiles(store, (t.user_id for t in needing))
    enriched = []
    for ticket in tickets:
        user = profiles.get(ticket.user_id)
        if ticket.user_name or ticket.user_email or user is None:
            enriched.append(ticket)
            continue
        enriched.append(
            replace(
                ticket,
                user_name=profile_name(user),
                user_email=as_optional_str(user.get("email")),
            )
        )
    return enriched
