"""Rich/JSON output for ServiceResult.

Humans get a status line and key-value fields; ``--json`` gets the
serialized result; ``--quiet`` gets a single line.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from rich.text import Text

from lndclient.output.console import create_console, get_output, style_for_field

if TYPE_CHECKING:
    from rich.console import Console

    from lndclient.services.result import ServiceResult


def _field(console: Console, key: str, value: Any) -> None:
    if isinstance(value, list):
        joiner = ", " if key == "clients" else ","
        value = joiner.join(str(item) for item in value)
    console.print(
        Text(f"  {key}: ", style="lnd.key"),
        Text(str(value), style=style_for_field(key)),
        sep="",
    )


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    console = create_console()
    if result.ok:
        console.print(Text("OK", style="lnd.ok"), Text(f"  {result.op}", style="lnd.op"), sep="")
        for key, value in result.data.items():
            _field(console, key, value)
        if verbose and result.meta:
            for key, value in result.meta.items():
                console.print(Text(f"  {key}: {value}", style="dim"))
    else:
        error = result.error
        message = error.message if error else "Unknown error"
        console.print(
            Text("ERROR", style="lnd.error"), Text(f"  {result.op}: {message}"), sep=""
        )
        if error is not None:
            console.print(Text(f"  code: {error.code}", style="lnd.key"))
            for key, value in error.detail.items():
                console.print(Text(f"  {key}: {value}", style="lnd.key"))
    return get_output(console).rstrip("\n")


def format_result(
    result: ServiceResult,
    *,
    json_output: bool = False,
    quiet: bool = False,
    verbose: bool = False,
) -> str:
    """Format a ServiceResult for display."""
    if json_output:
        return result.model_dump_json(indent=2)
    if quiet:
        if result.ok:
            return f"OK: {result.op}"
        message = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op}: {message}"
    return render_result(result, verbose=verbose)
