"""
Cancellation and deadline signal for config reloads.

Reloads talk to the Kubernetes API and the filesystem and have no timeout of
their own. Callers pass a ReloadContext so outstanding reads can be abandoned.
"""

import threading
import time
from typing import Optional


class ReloadContext:
    """
    Cancellation token with an optional deadline.

    Args:
        timeout: Seconds until the context expires (None = no deadline)
    """

    def __init__(self, timeout: Optional[float] = None):
        self._cancel_event = threading.Event()
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    @classmethod
    def background(cls) -> 'ReloadContext':
        """Context that is never cancelled and has no deadline"""
        return cls()

    def cancel(self):
        """Cancel the context; pending and future reads are skipped"""
        self._cancel_event.set()

    @property
    def cancelled(self) -> bool:
        if self._cancel_event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None when there is none"""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())
