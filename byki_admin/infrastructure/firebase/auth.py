"""Firebase Authentication boundary (Identity Toolkit REST API over httpx)."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import httpx

from byki_admin.domain.exceptions import AuthenticationException

logger = logging.getLogger(__name__)

_SIGN_IN_URL = "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"

# Identity Toolkit error codes that mean "bad credentials", not an outage.
_CREDENTIAL_ERRORS = frozenset(
    {
        "EMAIL_NOT_FOUND",
        "INVALID_PASSWORD",
        "INVALID_LOGIN_CREDENTIALS",
        "INVALID_EMAIL",
        "USER_DISABLED",
        "MISSING_PASSWORD",
    }
)


@dataclass(frozen=True)
class FirebaseSession:
    """Result of a successful password sign-in."""

    uid: str
    email: str
    id_token: str
    refresh_token: str


class FirebaseAuthClient:
    """Email/password sign-in against the project's Firebase Auth tenant."""

    def __init__(
        self, api_key: str, *, http_client: httpx.AsyncClient | None = None
    ) -> None:
        self._api_key = api_key
        self._http = http_client if http_client is not None else httpx.AsyncClient(timeout=30.0)
        self._owns_http = http_client is None

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    async def sign_in_with_password(self, email: str, password: str) -> FirebaseSession:
        """Verify credentials and return the Firebase session.

        Raises:
            AuthenticationException: Credentials were rejected.
            httpx.HTTPStatusError: Identity Toolkit failed for another reason.
        """
        resp = await self._http.post(
            _SIGN_IN_URL,
            params={"key": self._api_key},
            json={"email": email, "password": password, "returnSecureToken": True},
        )
        if resp.status_code == 400:
            code = _error_code(resp)
            if code.split(" ", 1)[0] in _CREDENTIAL_ERRORS or not code:
                logger.info("Sign-in rejected for %s: %s", email, code or "unknown")
                raise AuthenticationException("Invalid email or password")
        resp.raise_for_status()
        body = resp.json()
        return FirebaseSession(
            uid=body["localId"],
            email=body.get("email", email),
            id_token=body.get("idToken", ""),
            refresh_token=body.get("refreshToken", ""),
        )


def _error_code(resp: httpx.Response) -> str:
    try:
        return str(resp.json().get("error", {}).get("message", ""))
    except ValueError:
        return ""
