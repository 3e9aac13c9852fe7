"""Locate ``lndclient.toml``.

Lookup order: the LNDCLIENT_CONFIG env var, then the nearest
``lndclient.toml`` in the working directory or any of its ancestors. The
``--config`` flag bypasses discovery entirely (see ``LndSettings.from_cli``).
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "lndclient.toml"
CONFIG_ENV_VAR = "LNDCLIENT_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file for *start* (default: cwd), or None.

    A set LNDCLIENT_CONFIG that names no file yields None rather than
    falling back to the walk-up search.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
