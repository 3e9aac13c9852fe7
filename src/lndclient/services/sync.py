"""Poll ``GetInfo`` until lnd reports it is synced to its chain backend.

States: IDLE → POLLING → {SYNCED, FAILED, CANCELLED}

The overall wait has no deadline: an initial block download can take
hours. Each individual poll is bounded by its own short timeout. Polling
runs on a worker thread that hands its single outcome back through a
Future; cancellation is only observed between polls.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future
from enum import StrEnum
from typing import TYPE_CHECKING

from lndclient.domain.cancellation import CancellationToken
from lndclient.errors import SyncWaitFailed

if TYPE_CHECKING:
    from lndclient.clients.lightning import LightningClient

logger = logging.getLogger(__name__)

__all__ = ["CancellationToken", "SyncMonitor", "SyncState", "wait_for_chain_sync"]


class SyncState(StrEnum):
    IDLE = "idle"
    POLLING = "polling"
    SYNCED = "synced"
    FAILED = "failed"
    CANCELLED = "cancelled"


class SyncMonitor:
    """Polls a LightningClient until ``synced_to_chain`` is reported.

    Parameters:
        client: Client whose ``get_info`` is polled.
        poll_interval: Seconds to wait between polls.
        rpc_timeout: Deadline for each individual ``get_info`` call.
        cancel: Optional token; cancelling it ends the wait with its cause.
    """

    def __init__(
        self,
        client: LightningClient,
        *,
        poll_interval: float,
        rpc_timeout: float,
        cancel: CancellationToken | None = None,
    ) -> None:
        self._client = client
        self._poll_interval = poll_interval
        self._rpc_timeout = rpc_timeout
        self._cancel = cancel or CancellationToken()
        self._state = SyncState.IDLE
        self.polls = 0

    @property
    def state(self) -> SyncState:
        return self._state

    def start(self) -> Future[None]:
        """Start polling on a worker thread; the Future carries the outcome."""
        outcome: Future[None] = Future()
        outcome.set_running_or_notify_cancel()
        self._state = SyncState.POLLING
        worker = threading.Thread(
            target=self._poll_loop, args=(outcome,), name="lnd-chain-sync", daemon=True
        )
        worker.start()
        return outcome

    def wait(self) -> None:
        """Block until synced.

        Raises:
            SyncWaitFailed: on a poll error or a cancellation.
        """
        self.start().result()

    def _poll_loop(self, outcome: Future[None]) -> None:
        while True:
            self.polls += 1
            try:
                info = self._client.get_info(timeout=self._rpc_timeout)
            except Exception as exc:
                self._state = SyncState.FAILED
                failure = SyncWaitFailed(f"error in GetInfo call: {exc}")
                failure.__cause__ = exc
                outcome.set_exception(failure)
                return

            if info.synced_to_chain:
                self._state = SyncState.SYNCED
                outcome.set_result(None)
                return

            logger.debug("lnd not yet synced to chain at height %d", info.block_height)

            if self._cancel.wait(self._poll_interval):
                self._state = SyncState.CANCELLED
                cause = self._cancel.cause
                failure = SyncWaitFailed(f"chain sync wait cancelled: {cause}", cancelled=True)
                failure.__cause__ = cause
                outcome.set_exception(failure)
                return


def wait_for_chain_sync(
    client: LightningClient,
    *,
    poll_interval: float,
    rpc_timeout: float,
    cancel: CancellationToken | None = None,
) -> None:
    """Block until *client*'s node is synced to its chain backend."""
    SyncMonitor(
        client, poll_interval=poll_interval, rpc_timeout=rpc_timeout, cancel=cancel
    ).wait()
