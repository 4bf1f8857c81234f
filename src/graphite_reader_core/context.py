"""
FetchContext for cancelling or bounding a Graphite fetch.
"""

import threading
import time
from typing import Callable, Optional


class FetchContext:
    """
    Cancellation and deadline carrier for GraphiteClient.fetch.

    A context may be cancelled from any thread. Callbacks registered with
    on_cancel run once, on the cancelling thread, and are used by the client
    to close an in-flight response.

    Example:
        ctx = FetchContext(timeout=2.0)
        metrics = client.fetch(request, ctx)
    """

    def __init__(self, timeout: Optional[float] = None):
        """
        Initialize the context.

        Args:
            timeout: Seconds from now until the deadline, or None for no deadline.
        """
        self.deadline = time.monotonic() + timeout if timeout is not None else None

        self._lock = threading.Lock()
        self._cancelled = False
        self._callbacks: list[Callable[[], None]] = []

    @property
    def cancelled(self) -> bool:
        """Whether cancel() has been called."""
        return self._cancelled

    @property
    def expired(self) -> bool:
        """Whether the deadline has passed."""
        return self.deadline is not None and time.monotonic() >= self.deadline

    @property
    def done(self) -> bool:
        """Whether the context is cancelled or expired."""
        return self.cancelled or self.expired

    def remaining(self) -> Optional[float]:
        """
        Get seconds left before the deadline.

        Returns:
            Non-negative seconds remaining, or None if there is no deadline.
        """
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def cancel(self) -> None:
        """Cancel the context and run registered callbacks."""
        with self._lock:
            if self._cancelled:
                return
            self._cancelled = True
            callbacks, self._callbacks = self._callbacks, []

        for callback in callbacks:
            callback()

    def on_cancel(self, callback: Callable[[], None]) -> Callable[[], None]:
        """
        Register a callback to run when the context is cancelled.

        Runs the callback immediately if the context is already cancelled.

        Args:
            callback: Zero-argument callable.

        Returns:
            Function that unregisters the callback.
        """
        with self._lock:
            if not self._cancelled:
                self._callbacks.append(callback)
                return lambda: self._remove(callback)

        callback()
        return lambda: None

    def _remove(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)
