"""Cancelable one-shot timer behind the continue gate.

The sequencer owns exactly one ``GateTimer``.  Every call to :meth:`arm`
cancels whatever was pending, so a timer armed for a step the user has
already left can never fire.
"""

from __future__ import annotations

import asyncio
from typing import Callable


class GateTimer:
    """Wraps a single ``loop.call_later`` handle.

    Args:
        delay: seconds between :meth:`arm` and the callback
    """

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def arm(self, callback: Callable[[], None]) -> None:
        """Cancel any pending timer and schedule ``callback`` after ``delay``.

        Must be called from inside a running event loop.
        """
        self.cancel()
        loop = asyncio.get_running_loop()

        def _fire() -> None:
            self._handle = None
            callback()

        self._handle = loop.call_later(self.delay, _fire)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
