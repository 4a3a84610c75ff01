"""Admin session tokens.

The dashboard session is a signed JWT carrying the admin identity resolved
at sign-in (Firebase uid as ``sub`` plus email, name and role) and the id of
the server-side session (``sid``) opened for it in AppStateStore. Secret,
algorithm and lifetime come from byki_admin.core.config.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast

from jose import JWTError, jwt

from byki_admin.core.config import get_settings
from byki_admin.domain.entities import AdminUser
from byki_admin.domain.enums import ADMIN_ROLES, UserRole


@dataclass(frozen=True)
class SessionClaims:
    session_id: str
    admin: AdminUser


def create_session_token(
    admin: AdminUser, session_id: str, ttl: timedelta | None = None
) -> str:
    """Sign a session token for ``admin``.

    Args:
        admin: Identity returned by AuthService.sign_in.
        session_id: Key of the session stored in AppStateStore.
        ttl: Token lifetime; defaults to settings.access_token_expire_minutes.
    """
    settings = get_settings()
    if ttl is None:
        ttl = timedelta(minutes=settings.access_token_expire_minutes)
    claims = {
        "sub": admin.uid,
        "email": admin.email,
        "name": admin.name,
        "role": admin.role.value,
        "sid": session_id,
        "exp": datetime.now(UTC) + ttl,
    }
    encoded = jwt.encode(
        claims,
        settings.secret_key.get_secret_value(),
        algorithm=settings.algorithm,
    )
    return cast(str, encoded)


def decode_session_token(token: str) -> dict[str, Any]:
    """Verify signature and expiry and return the claims.

    Raises:
        ValueError: Bad signature, expired, or missing ``exp``/``sub``.
    """
    settings = get_settings()
    try:
        return jwt.decode(
            token,
            settings.secret_key.get_secret_value(),
            algorithms=[settings.algorithm],
            options={"require_exp": True, "require_sub": True},
        )
    except JWTError as e:
        raise ValueError(f"Invalid session token: {e!s}") from e


def read_session_token(token: str) -> SessionClaims | None:
    """Return the token's session, or None when invalid or not an admin session."""
    try:
        claims = decode_session_token(token)
        role = UserRole(claims.get("role"))
    except ValueError:
        return None
    session_id = claims.get("sid")
    if role not in ADMIN_ROLES or not session_id:
        return None
    admin = AdminUser(
        uid=claims["sub"],
        email=claims.get("email", ""),
        name=claims.get("name", ""),
        role=role,
    )
    return SessionClaims(session_id=session_id, admin=admin)
