"""Alert-on-increase watcher for the live emergency monitor."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)


class EmergencyAlertWatcher:
    """Raise an alert when the pending count grows from a non-zero value.

    The count starts at 0, so the first push never alerts; later pushes alert
    only on an increase. ``play_sound`` failures (for example a client that
    blocks autoplay) are swallowed.
    """

    def __init__(
        self,
        on_alert: Callable[[int], Awaitable[None]],
        play_sound: Callable[[], Awaitable[None]],
    ) -> None:
        self._on_alert = on_alert
        self._play_sound = play_sound
        self._previous = 0

    @property
    def previous_count(self) -> int:
        return self._previous

    async def observe(self, count: int) -> bool:
        """Record a new pending count; return True when it raised an alert."""
        alerted = count > self._previous and self._previous != 0
        self._previous = count
        if not alerted:
            return False
        await self._on_alert(count)
        try:
            await self._play_sound()
        except Exception:
            logger.debug("Alert sound could not be played", exc_info=True)
        return True
