"""Bitcoin networks lnd can run on, their chain parameters and default paths."""

from __future__ import annotations

import os
import sys
from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel

from lndclient.errors import ConfigurationError

DEFAULT_RPC_PORT = "10009"
DEFAULT_TLS_CERT_FILENAME = "tls.cert"
DEFAULT_DATA_DIR = "data"
DEFAULT_CHAIN_SUBDIR = "chain"


class Network(StrEnum):
    """Networks understood by lnd, spelled the way ``GetInfo`` reports them."""

    MAINNET = "mainnet"
    TESTNET = "testnet"
    REGTEST = "regtest"
    SIMNET = "simnet"

    @classmethod
    def parse(cls, value: str) -> Network:
        """Return the network named *value* or raise ConfigurationError."""
        try:
            return cls(value)
        except ValueError:
            msg = f"unsupported network: {value}"
            raise ConfigurationError(msg) from None

    def chain_params(self) -> ChainParams:
        return _CHAIN_PARAMS[self]


class ChainParams(BaseModel):
    """The subset of bitcoin chain parameters callers typically need."""

    model_config = {"frozen": True}

    name: str
    bech32_hrp: str
    default_port: int


_CHAIN_PARAMS: dict[Network, ChainParams] = {
    Network.MAINNET: ChainParams(name="mainnet", bech32_hrp="bc", default_port=8333),
    Network.TESTNET: ChainParams(name="testnet3", bech32_hrp="tb", default_port=18333),
    Network.REGTEST: ChainParams(name="regtest", bech32_hrp="bcrt", default_port=18444),
    Network.SIMNET: ChainParams(name="simnet", bech32_hrp="sb", default_port=18555),
}


def app_data_dir(app: str = "lnd") -> Path:
    """Return the per-user application data directory lnd uses by default.

    ``~/.lnd`` on Linux and BSDs, ``~/Library/Application Support/Lnd`` on
    macOS, ``%LOCALAPPDATA%\\Lnd`` on Windows.
    """
    home = Path.home()
    if sys.platform == "win32":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        root = Path(base) if base else home
        return root / app.capitalize()
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / app.capitalize()
    return home / f".{app.lower()}"


def default_tls_cert_path() -> Path:
    return app_data_dir() / DEFAULT_TLS_CERT_FILENAME


def default_macaroon_dir(network: str) -> Path:
    """Macaroon directory lnd writes to for *network*.

    Raises:
        ConfigurationError: if *network* is not one lnd supports.
    """
    net = Network.parse(network)
    return app_data_dir() / DEFAULT_DATA_DIR / DEFAULT_CHAIN_SUBDIR / "bitcoin" / net.value
