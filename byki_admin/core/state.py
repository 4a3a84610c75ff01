"""Dashboard session and UI state.

Each transition returns a new immutable value; ``AppStateStore`` holds the
current one for the lifetime of the app and refuses transitions once closed.
Auth state is kept per signed-in session, keyed by the session id carried
in the session JWT; UI state is shared by the dashboard.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Literal

from byki_admin.core.constants import DEFAULT_PAGE
from byki_admin.domain.entities import AdminUser
from byki_admin.domain.exceptions import AppStateClosedException
from byki_admin.shared.utils.generators import generate_cuid

logger = logging.getLogger(__name__)

NotificationKind = Literal["success", "error", "warning", "info"]


@dataclass(frozen=True)
class UINotification:
    """Toast shown by the dashboard. ``duration`` 0 means it stays until dismissed."""

    id: str
    type: NotificationKind
    message: str
    description: str | None = None
    duration: float | None = None


@dataclass(frozen=True)
class AuthState:
    user: AdminUser | None = None
    loading: bool = True
    error: str | None = None

    def signing_in(self) -> AuthState:
        return replace(self, loading=True, error=None)

    def signed_in(self, user: AdminUser) -> AuthState:
        return AuthState(user=user, loading=False, error=None)

    def failed(self, message: str) -> AuthState:
        return AuthState(user=None, loading=False, error=message)

    def signed_out(self) -> AuthState:
        return AuthState(user=None, loading=False, error=None)

    def cleared_error(self) -> AuthState:
        return replace(self, error=None)


@dataclass(frozen=True)
class UIState:
    sidebar_collapsed: bool = False
    current_page: str = DEFAULT_PAGE
    notifications: tuple[UINotification, ...] = ()

    def toggle_sidebar(self) -> UIState:
        return replace(self, sidebar_collapsed=not self.sidebar_collapsed)

    def set_current_page(self, page: str) -> UIState:
        return replace(self, current_page=page)

    def add_notification(
        self,
        type: NotificationKind,
        message: str,
        description: str | None = None,
        duration: float | None = None,
    ) -> UIState:
        """Append a notification with a fresh id."""
        notification = UINotification(
            id=generate_cuid(),
            type=type,
            message=message,
            description=description,
            duration=duration,
        )
        return replace(self, notifications=(*self.notifications, notification))

    def remove_notification(self, notification_id: str) -> UIState:
        return replace(
            self,
            notifications=tuple(
                n for n in self.notifications if n.id != notification_id
            ),
        )

    def clear_notifications(self) -> UIState:
        return replace(self, notifications=())


@dataclass(frozen=True)
class AppState:
    ui: UIState = field(default_factory=UIState)
    sessions: Mapping[str, AuthState] = field(
        default_factory=lambda: MappingProxyType({})
    )


class AppStateStore:
    """Holds the current AppState; created at startup, closed at shutdown."""

    def __init__(self) -> None:
        self._state = AppState()
        self._closed = False

    @property
    def state(self) -> AppState:
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def _check_open(self) -> None:
        if self._closed:
            raise AppStateClosedException()

    def session(self, session_id: str) -> AuthState | None:
        return self._state.sessions.get(session_id)

    def set_session(self, session_id: str, auth: AuthState) -> AuthState:
        """Store ``auth`` as the state of one session, opening it if new."""
        self._check_open()
        sessions = {**self._state.sessions, session_id: auth}
        self._state = replace(self._state, sessions=MappingProxyType(sessions))
        return auth

    def end_session(self, session_id: str) -> AuthState | None:
        """Forget a session and return its last state, or None if unknown."""
        self._check_open()
        sessions = dict(self._state.sessions)
        ended = sessions.pop(session_id, None)
        self._state = replace(self._state, sessions=MappingProxyType(sessions))
        return ended

    def set_ui(self, ui: UIState) -> UIState:
        self._check_open()
        self._state = replace(self._state, ui=ui)
        return ui

    def notify(
        self,
        type: NotificationKind,
        message: str,
        description: str | None = None,
        duration: float | None = None,
    ) -> UINotification:
        """Add a UI notification and return it."""
        ui = self.set_ui(
            self._state.ui.add_notification(type, message, description, duration)
        )
        return ui.notifications[-1]

    def close(self) -> None:
        self._closed = True
        logger.info("Application state store closed")
