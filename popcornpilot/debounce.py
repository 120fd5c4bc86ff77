"""Debounce raw input into settled values."""

import asyncio
from collections.abc import Callable
from typing import Any

from popcornpilot.logging import get_logger

logger = get_logger()

DEFAULT_QUIET_INTERVAL = 0.5


class Debouncer:
    """
    Turn a rapidly changing input value into a settled value.

    ``on_input_change`` only stores the raw value and (re)arms a timer on the
    running event loop. When ``quiet_interval`` seconds pass without another
    change, the latest raw value becomes the settled value and ``on_settle``
    is called once with it. Intermediate values of a burst are never seen by
    ``on_settle``. The empty string settles like any other value.
    """

    def __init__(
        self,
        on_settle: Callable[[str], Any],
        quiet_interval: float = DEFAULT_QUIET_INTERVAL,
    ) -> None:
        self._on_settle = on_settle
        self.quiet_interval = quiet_interval
        self.raw_value = ""
        self.settled_value = ""
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        """True while a settle is scheduled."""
        return self._handle is not None

    def on_input_change(self, raw: str) -> None:
        """Record ``raw`` and restart the quiet period.

        Must be called from a coroutine or callback running on the event loop.
        """
        self.raw_value = raw
        if self._handle is not None:
            self._handle.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.quiet_interval, self._settle)

    def flush(self) -> None:
        """Settle the pending value now instead of waiting for the timer."""
        if self._handle is None:
            return
        self._handle.cancel()
        self._settle()

    def cancel(self) -> None:
        """Drop the pending settle, if any."""
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def _settle(self) -> None:
        self._handle = None
        self.settled_value = self.raw_value
        logger.debug("Settled query %r", self.settled_value)
        self._on_settle(self.settled_value)
