"""Command: block until lnd is synced to its chain backend."""

from __future__ import annotations

import signal
from typing import TYPE_CHECKING, Any

import click

from lndclient.commands._base import LndCommand

if TYPE_CHECKING:
    from lndclient.commands._context import AppContext


@click.command(
    "wait-sync",
    cls=LndCommand,
    examples="""\
  lndclient wait-sync
  lndclient --json wait-sync""",
)
@click.pass_obj
def wait_sync(app: AppContext) -> None:
    """Wait for chain sync. Ctrl-C cancels the wait cleanly."""
    from lndclient.domain.cancellation import CancellationToken

    token = CancellationToken()

    def _interrupt(_signum: int, _frame: Any) -> None:
        token.cancel("interrupted by user")

    previous = signal.signal(signal.SIGINT, _interrupt)
    try:
        result = app.node_service(chain_sync_cancel=token).wait_sync()
    finally:
        signal.signal(signal.SIGINT, previous)
    app.emit(result)
