"""Pydantic configuration models with code-baked defaults.

:class:`ServicesConfig` is everything ``new_lnd_services`` needs to reach an
lnd node. Defaults (minimum version, timeouts) are injected here rather than
read from module globals at call time.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator

from lndclient.domain.cancellation import CancellationToken
from lndclient.domain.network import Network
from lndclient.domain.version import MINIMAL_COMPATIBLE_VERSION, VersionDescriptor
from lndclient.infrastructure.connection import Dialer

DEFAULT_RPC_TIMEOUT = 30.0
DEFAULT_CHAIN_SYNC_POLL_INTERVAL = 5.0


class ServicesConfig(BaseModel):
    """Connection, credential and compatibility settings for one lnd node.

    Attributes:
        lnd_address: ``host:port``, bare host, or ``unix:`` socket path.
        network: Network the node is expected to run on.
        macaroon_dir: Directory holding lnd's per-domain macaroons.
        custom_macaroon_path: Single macaroon file used for every domain.
        custom_macaroon: Raw macaroon bytes; overrides both path sources.
        tls_path: lnd's ``tls.cert``; defaults to the one in lnd's data dir.
        raw_tls: PEM bytes of the certificate; overrides ``tls_path``.
        check_version: Minimum version and build tags the node must have.
        dialer: Replaces the default channel dial strategy.
        block_until_chain_synced: Wait for chain sync before returning.
        chain_sync_cancel: Aborts the chain sync wait when cancelled.
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    lnd_address: str = "localhost:10009"
    network: str = Network.MAINNET.value
    macaroon_dir: Path | None = None
    custom_macaroon_path: Path | None = None
    custom_macaroon: bytes | None = None
    tls_path: Path | None = None
    raw_tls: bytes | None = None
    check_version: VersionDescriptor = Field(default_factory=lambda: MINIMAL_COMPATIBLE_VERSION)
    dialer: Dialer | None = None
    block_until_chain_synced: bool = False
    chain_sync_cancel: CancellationToken | None = None
    rpc_timeout: float = Field(default=DEFAULT_RPC_TIMEOUT, gt=0)
    chain_sync_poll_interval: float = Field(default=DEFAULT_CHAIN_SYNC_POLL_INTERVAL, gt=0)

    @field_validator(
        "macaroon_dir",
        "custom_macaroon_path",
        "custom_macaroon",
        "tls_path",
        "raw_tls",
        mode="before",
    )
    @classmethod
    def _empty_is_unset(cls, value: Any) -> Any:
        if value in ("", b""):
            return None
        return value

    @field_validator("check_version", mode="before")
    @classmethod
    def _default_check_version(cls, value: Any) -> Any:
        if value is None:
            return MINIMAL_COMPATIBLE_VERSION
        return value
