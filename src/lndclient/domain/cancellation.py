"""Cooperative cancellation token carrying a cause."""

from __future__ import annotations

import threading


class Cancelled(Exception):  # noqa: N818
    """Default cause recorded when a token is cancelled without one."""

    def __init__(self, message: str = "cancelled") -> None:
        super().__init__(message)


class CancellationToken:
    """A one-way cancellation signal that waiters can block on.

    Once cancelled, the token stays cancelled and :attr:`cause` holds the
    reason given by the first call to :meth:`cancel`.
    """

    def __init__(self) -> None:
        self._event = threading.Event()
        self._lock = threading.Lock()
        self._cause: BaseException | None = None

    def cancel(self, cause: BaseException | str | None = None) -> None:
        with self._lock:
            if self._event.is_set():
                return
            if cause is None:
                cause = Cancelled()
            elif isinstance(cause, str):
                cause = Cancelled(cause)
            self._cause = cause
            self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    @property
    def cause(self) -> BaseException | None:
        return self._cause

    def wait(self, timeout: float | None = None) -> bool:
        """Block up to *timeout* seconds; True if the token was cancelled."""
        return self._event.wait(timeout)
