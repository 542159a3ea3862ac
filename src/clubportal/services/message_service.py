"""Transient status messages."""

import threading
from collections.abc import Callable

from clubportal.utils.logging_utils import EnhancedLoggerMixin


DEFAULT_TIMEOUT_MS = 2500

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


def _daemon_timer(interval: float, function: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(interval, function)
    timer.daemon = True
    return timer


class MessageService(EnhancedLoggerMixin):
    """Holds the single visible status message.

    Each message clears itself after ``timeout_ms``. Showing a new message
    cancels the pending expiry, so at most one timer is ever armed.
    """

    def __init__(self, timeout_ms: int = DEFAULT_TIMEOUT_MS, timer_factory: TimerFactory = _daemon_timer):
        super().__init__()
        self.timeout_ms = timeout_ms
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._message = ""
        self._timer: threading.Timer | None = None
        self._generation = 0

    @property
    def message(self) -> str:
        """Currently visible message, empty when none."""
        with self._lock:
            return self._message

    @property
    def pending(self) -> bool:
        """Whether an expiry timer is armed."""
        with self._lock:
            return self._timer is not None

    def show(self, text: str, timeout_ms: int | None = None) -> None:
        """Display a message, replacing any current one."""
        delay = (timeout_ms if timeout_ms is not None else self.timeout_ms) / 1000
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            generation = self._generation
            self._message = text
            self._timer = self._timer_factory(delay, lambda: self._expire(generation))
            self._timer.start()
        self.debug("Showing message", message=text, timeout_s=delay)

    def _expire(self, generation: int) -> None:
        with self._lock:
            # A newer message owns the slot now
            if generation != self._generation:
                return
            self._message = ""
            self._timer = None

    def _cancel_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def clear(self) -> None:
        """Remove the message and disarm the timer."""
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            self._message = ""

    def close(self) -> None:
        """Disarm the timer on shutdown, keeping the last message readable."""
        with self._lock:
            self._cancel_locked()
