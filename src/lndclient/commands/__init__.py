"""lndclient subcommands.

Each command is a module of its own; :func:`register_commands` attaches
them all to the root group.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    from lndclient.commands.status import status
    from lndclient.commands.sync import wait_sync
    from lndclient.commands.version import version

    for command in (status, version, wait_sync):
        cli.add_command(command)
