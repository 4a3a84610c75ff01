"""Security: admin session JWTs."""

from byki_admin.infrastructure.security.jwt import (
    SessionClaims,
    create_session_token,
    decode_session_token,
    read_session_token,
)

__all__ = [
    "SessionClaims",
    "create_session_token",
    "decode_session_token",
    "read_session_token",
]
