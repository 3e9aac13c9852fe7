"""Handles for the optional sub-servers.

Each is activated only when its macaroon resolved. They carry the channel
and their own macaroon; RPC wrappers for them are added by callers.
"""

from __future__ import annotations

from lndclient.clients.base import DomainClient


class InvoicesClient(DomainClient):
    """``invoicesrpc.Invoices``.

    Starts no workers of its own; its shutdown hook joins whatever a caller
    runs through :meth:`DomainClient._spawn`.
    """


class SignerClient(DomainClient):
    """``signrpc.Signer``."""


class WalletKitClient(DomainClient):
    """``walletrpc.WalletKit``."""


class RouterClient(DomainClient):
    """``routerrpc.Router``."""
