"""Auth API: admin sign-in issuing a session JWT, sign-out and current admin."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from byki_admin.api.v1.dependencies import (
    CurrentAdmin,
    CurrentSession,
    get_app_state_store,
    get_auth_service,
)
from byki_admin.application.services import AuthService
from byki_admin.core.limiter import limit_auth
from byki_admin.core.state import AppStateStore, AuthState
from byki_admin.domain.exceptions import BykiException
from byki_admin.infrastructure.security.jwt import create_session_token
from byki_admin.schemas.auth import AdminResponse, LoginRequest, TokenResponse
from byki_admin.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    auth_svc: Annotated[AuthService, Depends(get_auth_service)],
    app_state: Annotated[AppStateStore, Depends(get_app_state_store)],
):
    """Sign in with Firebase email/password; only admin roles get a token.

    The session is open (loading) while Firebase answers and is torn down
    again when sign-in is rejected.
    """
    session_id = generate_cuid()
    auth = app_state.set_session(session_id, AuthState().signing_in())
    try:
        admin = await auth_svc.sign_in(body.email, body.password)
    except BykiException as e:
        app_state.end_session(session_id)
        logger.info("Sign-in rejected (%s)", e.error_code)
        raise
    except Exception:
        app_state.end_session(session_id)
        raise
    app_state.set_session(session_id, auth.signed_in(admin))
    return TokenResponse(
        access_token=create_session_token(admin, session_id),
        admin=AdminResponse.model_validate(admin),
    )


@router.post("/logout", status_code=204)
async def logout(
    session: CurrentSession,
    app_state: Annotated[AppStateStore, Depends(get_app_state_store)],
) -> None:
    """End the session; its token is refused from now on."""
    app_state.end_session(session.session_id)
    logger.info("Admin %s signed out", session.admin.uid)


@router.get("/me", response_model=AdminResponse)
async def me(admin: CurrentAdmin):
    return AdminResponse.model_validate(admin)
