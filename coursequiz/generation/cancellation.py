"""Cooperative cancellation for generation requests."""

import threading
import time
from collections.abc import Callable

from coursequiz.errors import GenerationCancelled


class CancelToken:
    """Cancellation signal with an optional deadline.

    A token is cancelled explicitly through :meth:`cancel` or implicitly once
    ``timeout`` seconds have elapsed since it was created. Backoff waits go
    through :meth:`sleep`, which returns early and raises GenerationCancelled
    as soon as either happens.

    Args:
        timeout: Seconds until the token expires, or None for no deadline.
        clock: Monotonic clock, injectable for tests.
    """

    def __init__(
        self,
        timeout: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._event = threading.Event()
        self._clock = clock
        self._deadline = None if timeout is None else clock() + timeout

    def cancel(self) -> None:
        self._event.set()

    def remaining(self) -> float | None:
        """Seconds left before the deadline, or None without one."""
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._clock())

    @property
    def cancelled(self) -> bool:
        if self._event.is_set():
            return True
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def raise_if_cancelled(self) -> None:
        if self._event.is_set():
            raise GenerationCancelled("Generation was cancelled")
        if self.cancelled:
            raise GenerationCancelled("Generation deadline exceeded")

    def sleep(self, seconds: float) -> None:
        """Wait up to ``seconds``, aborting on cancellation or deadline.

        Raises:
            GenerationCancelled: If the token is cancelled before or during
                the wait, or the deadline falls inside it.
        """
        self.raise_if_cancelled()
        remaining = self.remaining()
        if remaining is not None and remaining < seconds:
            if self._event.wait(remaining):
                raise GenerationCancelled("Generation was cancelled")
            raise GenerationCancelled("Generation deadline exceeded")
        if self._event.wait(seconds):
            raise GenerationCancelled("Generation was cancelled")
