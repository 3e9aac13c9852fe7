"""Rich console and theme for lndclient output.

Every console writes into a StringIO so formatters return plain strings;
the caller decides which stream they end up on. Rich drops colors on its
own when the process is not attached to a terminal.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

LND_THEME = Theme(
    {
        "lnd.ok": "bold green",
        "lnd.error": "bold red",
        "lnd.warning": "bold yellow",
        "lnd.op": "bold cyan",
        "lnd.key": "dim",
        "lnd.pubkey": "bold blue",
        "lnd.chain": "magenta",
        "lnd.version": "cyan",
        "lnd.client": "green",
    }
)

# Result fields rendered with their own style; anything else is unstyled.
_FIELD_STYLES = {
    "pubkey": "lnd.pubkey",
    "chain": "lnd.chain",
    "version": "lnd.version",
    "clients": "lnd.client",
}


def style_for_field(key: str) -> str:
    """Theme style for a result field, or ``""`` for none."""
    return _FIELD_STYLES.get(key, "")


def create_console(*, no_color: bool = False, width: int = 120) -> Console:
    return Console(
        file=StringIO(),
        theme=LND_THEME,
        no_color=no_color,
        highlight=False,
        width=width,
    )


def get_output(console: Console) -> str:
    """Everything rendered into *console* so far."""
    if not isinstance(console.file, StringIO):
        raise TypeError("console was not created by create_console()")
    return console.file.getvalue()
