"""Cancellation and timeout context passed through collaborator calls."""

import threading
import time
from typing import Optional

from .errors import ExportCancelled


class Context:
    """Cancellation token with an optional deadline."""

    def __init__(self, timeout: Optional[float] = None):
        """
        Initialize the context.

        Args:
            timeout: Seconds until the context expires. None means no deadline.
        """
        self._cancelled = threading.Event()
        self.deadline = time.monotonic() + timeout if timeout is not None else None

    def cancel(self) -> None:
        """Cancel the context. Safe to call from another thread."""
        self._cancelled.set()

    @property
    def cancelled(self) -> bool:
        """True once cancelled or past the deadline."""
        if self._cancelled.is_set():
            return True
        return self.deadline is not None and time.monotonic() >= self.deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without one."""
        if self.deadline is None:
            return None
        return max(0.0, self.deadline - time.monotonic())

    def check(self) -> None:
        """
        Raise if the context is no longer active.

        Raises:
            ExportCancelled: If cancelled or the deadline has passed
        """
        if self._cancelled.is_set():
            raise ExportCancelled("context cancelled")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise ExportCancelled("context deadline exceeded")
