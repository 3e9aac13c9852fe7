"""Per-invocation state shared by every lndclient command.

The root group builds one AppContext from the merged settings; commands
receive it through ``@click.pass_obj``, ask it for a NodeService and hand
the ServiceResult back to :meth:`AppContext.emit`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from lndclient.output.formatters import format_result

if TYPE_CHECKING:
    from lndclient.config.settings import LndSettings
    from lndclient.services.node import NodeService
    from lndclient.services.result import ServiceResult


class AppContext:
    """Settings plus the helpers commands need to talk to lnd."""

    def __init__(self, settings: LndSettings) -> None:
        self.settings = settings

        from lndclient.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    def node_service(self, **config_overrides: Any) -> NodeService:
        """NodeService over the ``[lnd]`` settings.

        *config_overrides* go to ``LndSettings.to_services_config``.
        """
        from lndclient.services.node import NodeService

        return NodeService(self.settings.to_services_config(**config_overrides))

    def emit(self, result: ServiceResult) -> None:
        """Write *result* out; a failed result exits with status 1.

        Results go to stdout and failures to stderr. Warnings are printed
        to stderr after a human-readable success only; JSON output already
        carries them and quiet mode drops them.
        """
        settings = self.settings
        text = format_result(
            result,
            json_output=settings.json_output,
            quiet=settings.quiet,
            verbose=settings.verbose,
        )
        if not result.ok:
            click.echo(text, err=True)
            raise SystemExit(1)

        click.echo(text)
        if settings.json_output or settings.quiet:
            return
        for warning in result.warnings:
            click.echo(f"WARNING: {warning}", err=True)
