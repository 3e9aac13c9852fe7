"""Command: check the node against a minimum version."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from lndclient.commands._base import LndCommand

if TYPE_CHECKING:
    from lndclient.commands._context import AppContext


@click.command(
    cls=LndCommand,
    examples="""\
  lndclient version
  lndclient version --min-version v0.15.0
  lndclient version --min-version v0.16.0 --tag signrpc --tag walletrpc""",
)
@click.option("--min-version", default=None, help="Minimum lnd version, e.g. v0.15.0.")
@click.option(
    "--tag",
    "tags",
    multiple=True,
    help="Required build tag (repeatable). Defaults to the configured tags.",
)
@click.pass_obj
def version(app: AppContext, min_version: str | None, tags: tuple[str, ...]) -> None:
    """Check lnd's version and build tags, then print them."""
    from lndclient.domain.version import VersionDescriptor

    required = None
    if min_version is not None or tags:
        build_tags = tags or tuple(app.settings.lnd.build_tags)
        try:
            required = VersionDescriptor.parse(
                min_version or app.settings.lnd.min_version, build_tags=build_tags
            )
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint="--min-version") from exc

    app.emit(app.node_service().check_version(required))
