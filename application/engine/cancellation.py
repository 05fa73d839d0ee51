"""
Cooperative cancellation for long cascades.

Cancelling only stops further enqueuing. Batches already handed to the store
are awaited and reported; nothing committed is undone.
"""

import threading
import time
from typing import Optional


class OperationCancelled(Exception):
    """Raised inside the engine when its CancellationToken fires."""


class CancellationToken:
    """
    Caller-held cancellation flag with an optional deadline.

    Usage:
        >>> token = CancellationToken(timeout_seconds=30)
        >>> use_case.execute(caller_id, root, cancel_token=token)
        >>> token.cancel()  # from another thread
    """

    def __init__(self, timeout_seconds: Optional[float] = None):
        self._event = threading.Event()
        self._deadline = (
            time.monotonic() + timeout_seconds if timeout_seconds is not None else None
        )

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self._event.set()
            return True
        return False

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise OperationCancelled("Operation cancelled by caller")
