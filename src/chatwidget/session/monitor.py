"""Inactivity monitor.

Hides the timer mechanics behind reset/cancel: a single cancellable
`loop.call_later` handle, rescheduled (never stacked) on every reset.
"""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

logger = logging.getLogger(__name__)

INACTIVITY_TIMEOUT_SECONDS = 120.0


class MonitorState(str, Enum):
    IDLE = "idle"
    ARMED = "armed"
    FIRED = "fired"


class InactivityMonitor:
    """Single-shot, resettable inactivity timer.

    Idle until the first `reset()`, Armed while a firing is scheduled,
    Fired after the callback ran. The callback decides what firing means;
    the monitor itself has no memory of previous firings.
    """

    def __init__(
        self,
        on_expire: Callable[[], None],
        timeout: float = INACTIVITY_TIMEOUT_SECONDS,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        if timeout <= 0:
            raise ValueError(f"Inactivity timeout must be positive, got {timeout}")
        self._on_expire = on_expire
        self._timeout = timeout
        self._loop = loop
        self._handle: asyncio.TimerHandle | None = None
        self._state = MonitorState.IDLE

    @property
    def state(self) -> MonitorState:
        return self._state

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def is_armed(self) -> bool:
        return self._handle is not None

    def reset(self) -> None:
        """Cancel any pending firing and schedule a new one.

        Must be called from the event loop thread.
        """
        self.cancel()
        loop = self._loop or asyncio.get_running_loop()
        self._handle = loop.call_later(self._timeout, self._expire)
        self._state = MonitorState.ARMED

    def cancel(self) -> None:
        """Cancel the pending firing, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
            self._state = MonitorState.IDLE

    def _expire(self) -> None:
        self._handle = None
        self._state = MonitorState.FIRED
        logger.debug("Inactivity timeout after %.0fs", self._timeout)
        self._on_expire()
