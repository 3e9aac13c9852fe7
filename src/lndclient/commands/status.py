"""Command: connect, verify, and summarize the node."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lndclient.commands._base import LndCommand

if TYPE_CHECKING:
    from lndclient.commands._context import AppContext


@click.command(
    cls=LndCommand,
    examples="""\
  lndclient status
  lndclient --json status
  lndclient --network testnet --address node.example:10009 status
  LNDCLIENT_LND__NETWORK=testnet lndclient status""",
)
@click.pass_obj
def status(app: AppContext) -> None:
    """Bootstrap a connection and show alias, pubkey, version and clients."""
    app.emit(app.node_service().status())
