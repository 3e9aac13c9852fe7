"""Domain clients — thin per-sub-server handles over the shared channel.

Each client holds a non-owning reference to the channel plus its own
macaroon. No client ever closes the channel.
"""

from lndclient.clients.base import DomainClient
from lndclient.clients.chainnotifier import ChainNotifierClient
from lndclient.clients.lightning import LightningClient
from lndclient.clients.subservers import (
    InvoicesClient,
    RouterClient,
    SignerClient,
    WalletKitClient,
)
from lndclient.clients.versioner import VersionerClient

__all__ = [
    "ChainNotifierClient",
    "DomainClient",
    "InvoicesClient",
    "LightningClient",
    "RouterClient",
    "SignerClient",
    "VersionerClient",
    "WalletKitClient",
]
