"""lndclient entry point: global flags, settings merge, command registration."""

from __future__ import annotations

from typing import Any

import click

from lndclient import __version__
from lndclient.commands import register_commands
from lndclient.commands._context import AppContext
from lndclient.config.settings import LndSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="lndclient")
@click.option("--json", "json_output", is_flag=True, help="Print results as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print a single status line.")
@click.option("-v", "--verbose", is_flag=True, help="Debug logs and result metadata.")
@click.option("--log-json", is_flag=True, help="Write logs to stderr as JSON lines.")
@click.option("-c", "--config", "config_path", default=None, help="Path to lndclient.toml.")
@click.option("--address", default=None, help="lnd RPC address (overrides [lnd].address).")
@click.option("--network", default=None, help="Expected network (overrides [lnd].network).")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    config_path: str | None,
    address: str | None,
    network: str | None,
) -> None:
    """Connect to lnd and verify it is usable."""
    flags: dict[str, Any] = {
        "json_output": json_output,
        "quiet": quiet,
        "verbose": verbose,
        "log_json": log_json,
    }
    # Merged into the [lnd] table from env/TOML rather than replacing it.
    lnd = {key: value for key, value in (("address", address), ("network", network)) if value}
    if lnd:
        flags["lnd"] = lnd

    ctx.obj = AppContext(LndSettings.from_cli(config_path=config_path, **flags))
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
