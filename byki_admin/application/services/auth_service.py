"""Admin sign-in: Firebase password check plus a role gate on the user profile."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from byki_admin.domain.entities import AdminUser, User
from byki_admin.domain.enums import ADMIN_ROLES
from byki_admin.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
)

if TYPE_CHECKING:
    from byki_admin.infrastructure.firebase.auth import FirebaseAuthClient
    from byki_admin.infrastructure.firebase.services import FirestoreUserService

logger = logging.getLogger(__name__)


def _to_admin(user: User) -> AdminUser:
    return AdminUser(uid=user.id, email=user.email, name=user.name, role=user.role)


class AuthService:
    """Only accounts whose profile role is staff, admin or superAdmin may sign in."""

    def __init__(
        self,
        auth_client: "FirebaseAuthClient",
        users: "FirestoreUserService",
    ) -> None:
        self.auth_client = auth_client
        self.users = users

    async def sign_in(self, email: str, password: str) -> AdminUser:
        """Verify credentials and return the admin identity.

        Raises:
            AuthenticationException: Bad credentials or no profile document.
            AuthorizationException: The profile role is not an admin role; the
                Firebase session is discarded.
        """
        session = await self.auth_client.sign_in_with_password(email, password)
        user = await self.users.get_user(session.uid)
        if user is None:
            raise AuthenticationException("User not found")
        if user.role not in ADMIN_ROLES:
            logger.warning(
                "Rejected sign-in for %s: role %s is not an admin role",
                session.uid,
                user.role.value,
            )
            raise AuthorizationException(role=user.role.value)
        logger.info("Admin %s signed in", session.uid)
        return _to_admin(user)

    async def get_current_admin(self, uid: str) -> AdminUser | None:
        """Return the admin for ``uid``, or None when missing or not an admin."""
        user = await self.users.get_user(uid)
        if user is None or user.role not in ADMIN_ROLES:
            return None
        return _to_admin(user)
