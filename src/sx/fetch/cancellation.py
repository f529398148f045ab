"""Cooperative cancellation shared by fetch and install work."""

import threading
import time

from sx.core.errors import OperationCancelledError


class CancelToken:
    """Cancellation flag with an optional deadline.

    Workers poll the token between steps; blocking I/O uses
    remaining_seconds() as its timeout.
    """

    def __init__(self, deadline: float | None = None) -> None:
        """
        Args:
            deadline: time.monotonic() value after which the token reports
                cancelled, or None for no deadline
        """
        self._deadline = deadline
        self._event = threading.Event()

    @classmethod
    def with_timeout(cls, seconds: float) -> "CancelToken":
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        if self._event.is_set():
            return True
        return self._deadline is not None and time.monotonic() >= self._deadline

    def remaining_seconds(self) -> float | None:
        """Seconds until the deadline, None when there is none."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def raise_if_cancelled(self) -> None:
        """
        Raises:
            OperationCancelledError: If cancelled or past the deadline
        """
        if self._event.is_set():
            raise OperationCancelledError("Operation cancelled")
        if self._deadline is not None and time.monotonic() >= self._deadline:
            raise OperationCancelledError("Operation timed out")
