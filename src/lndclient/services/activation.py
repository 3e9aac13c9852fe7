"""Build domain clients in activation order and collect their shutdown hooks.

Order: LIGHTNING (mandatory) → VERSIONER → CHAIN_NOTIFIER → INVOICES →
SIGNER → WALLET_KIT → ROUTER

Optional domains are constructed only when their permission flag is set.
Construction is pure: it never fails once the flag is set.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from lndclient.clients.chainnotifier import ChainNotifierClient
from lndclient.clients.lightning import LightningClient
from lndclient.clients.subservers import (
    InvoicesClient,
    RouterClient,
    SignerClient,
    WalletKitClient,
)
from lndclient.clients.versioner import VersionerClient
from lndclient.domain.permissions import Domain
from lndclient.errors import PermissionDenied

if TYPE_CHECKING:
    import grpc

    from lndclient.domain.network import ChainParams
    from lndclient.domain.permissions import PermissionSet
    from lndclient.infrastructure.credentials import MacaroonPouch

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShutdownHook:
    """A named teardown step owned by the registry."""

    name: str
    run: Callable[[], None]

    def __call__(self) -> None:
        logger.debug("Wait for %s client to shut down", self.name)
        self.run()


@dataclass
class ActivatedClients:
    """The typed client slots; a slot is None when its domain is disabled."""

    lightning: LightningClient
    versioner: VersionerClient
    chain_notifier: ChainNotifierClient | None = None
    invoices: InvoicesClient | None = None
    signer: SignerClient | None = None
    wallet_kit: WalletKitClient | None = None
    router: RouterClient | None = None
    shutdown_hooks: list[ShutdownHook] = field(default_factory=list)


def activate_clients(
    channel: grpc.Channel,
    chain_params: ChainParams,
    permissions: PermissionSet,
    macaroons: MacaroonPouch,
) -> ActivatedClients:
    """Construct every permitted client over *channel*.

    Raises:
        PermissionDenied: if the core lightning domain is not permitted.
    """
    if not permissions.lightning:
        raise PermissionDenied(
            Domain.LIGHTNING.value,
            "required permissions for main lightning client not available, "
            "please use a different macaroon",
        )

    lightning = LightningClient(channel, chain_params, macaroons.get(Domain.LIGHTNING))
    hooks = [ShutdownHook("lightning", lightning.wait_for_finished)]

    # Version reporting only needs the read-only macaroon.
    versioner = VersionerClient(channel, macaroons.get(Domain.READ_ONLY))

    clients = ActivatedClients(lightning=lightning, versioner=versioner, shutdown_hooks=hooks)

    if permissions.chain_notifier:
        notifier = ChainNotifierClient(channel, macaroons.get(Domain.CHAIN_NOTIFIER))
        clients.chain_notifier = notifier
        hooks.append(ShutdownHook("chain notifier", notifier.wait_for_finished))

    if permissions.invoices:
        invoices = InvoicesClient(channel, macaroons.get(Domain.INVOICES))
        clients.invoices = invoices
        hooks.append(ShutdownHook("invoices", invoices.wait_for_finished))

    if permissions.signer:
        clients.signer = SignerClient(channel, macaroons.get(Domain.SIGNER))

    if permissions.wallet_kit:
        clients.wallet_kit = WalletKitClient(channel, macaroons.get(Domain.WALLET_KIT))

    if permissions.router:
        clients.router = RouterClient(channel, macaroons.get(Domain.ROUTER))

    logger.debug(
        "Activated clients: %s",
        ", ".join(d.value for d in permissions.enabled_domains()),
    )
    return clients
