"""Block epoch subscriptions over ``chainrpc.ChainNotifier``."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

import grpc

from lndclient.clients.base import DomainClient
from lndclient.infrastructure.protos import CHAIN_NOTIFIER_REGISTER_BLOCK_EPOCH, BlockEpoch

logger = logging.getLogger(__name__)

BlockCallback = Callable[[int, bytes], None]
ErrorCallback = Callable[[Exception], None]


class BlockSubscription:
    """Handle for a running block epoch stream."""

    def __init__(self, call: Any) -> None:
        self._call = call

    def cancel(self) -> None:
        self._call.cancel()


class ChainNotifierClient(DomainClient):
    """Delivers new block notifications on a background worker."""

    def register_block_epoch_ntfn(
        self,
        on_block: BlockCallback,
        on_error: ErrorCallback | None = None,
    ) -> BlockSubscription:
        """Stream new blocks to *on_block(height, hash)* until cancelled.

        Stream errors other than cancellation go to *on_error*; the worker
        exits when the stream ends, is cancelled, or the channel closes.
        """
        call = self._stream(CHAIN_NOTIFIER_REGISTER_BLOCK_EPOCH, BlockEpoch(), BlockEpoch)

        def _consume() -> None:
            try:
                for epoch in call:
                    on_block(epoch.height, bytes(epoch.hash))
            except grpc.RpcError as exc:
                if exc.code() == grpc.StatusCode.CANCELLED:
                    logger.debug("Block epoch subscription cancelled")
                    return
                logger.debug("Block epoch subscription failed: %s", exc)
                if on_error is not None:
                    on_error(exc)

        self._spawn("chainnotifier-block-epoch", _consume)
        return BlockSubscription(call)
