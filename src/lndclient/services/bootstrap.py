"""Bootstrap pipeline and the resulting service registry.

Pipeline: CREDENTIALS → CONNECT → COMPATIBILITY → PERMISSIONS → ACTIVATE
→ (optional) CHAIN_SYNC

Each stage aborts the bootstrap on failure. Once the channel is open, any
later failure closes it before the error propagates.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from lndclient.domain.network import Network
from lndclient.domain.permissions import Domain
from lndclient.errors import PermissionDenied
from lndclient.infrastructure.connection import open_channel
from lndclient.infrastructure.credentials import (
    MacaroonSource,
    check_source_exclusivity,
    load_tls_credentials,
)
from lndclient.services.activation import activate_clients
from lndclient.services.compatibility import check_lnd_compatibility, close_channel
from lndclient.services.permissions import resolve_permissions
from lndclient.services.sync import wait_for_chain_sync

if TYPE_CHECKING:
    import grpc

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
    from lndclient.config.models import ServicesConfig
    from lndclient.domain.network import ChainParams
    from lndclient.domain.permissions import PermissionSet
    from lndclient.domain.version import VersionDescriptor
    from lndclient.services.activation import ActivatedClients, ShutdownHook

logger = logging.getLogger(__name__)


class Teardown:
    """Closes the channel, then runs each shutdown hook. Runs at most once."""

    def __init__(self, channel: grpc.Channel) -> None:
        self._channel = channel
        self._hooks: list[ShutdownHook] = []
        self._lock = threading.Lock()
        self._done = False

    def register(self, hooks: list[ShutdownHook]) -> None:
        self._hooks.extend(hooks)

    @property
    def done(self) -> bool:
        return self._done

    def __call__(self) -> None:
        with self._lock:
            if self._done:
                return
            self._done = True

        logger.debug("Closing lnd connection")
        close_channel(self._channel)

        for hook in self._hooks:
            try:
                hook()
            except Exception:
                logger.error("Shutdown hook %s failed", hook.name, exc_info=True)

        logger.debug("Lnd services finished")


class LndServices:
    """Registry of activated clients plus cached node facts.

    Read-only after construction; :meth:`close` is the only transition and
    it is terminal. Slots for disabled domains hold ``None``.
    """

    def __init__(
        self,
        *,
        clients: ActivatedClients,
        chain_params: ChainParams,
        node_alias: str,
        node_pubkey: bytes,
        version: VersionDescriptor,
        permissions: PermissionSet,
        teardown: Teardown,
    ) -> None:
        self._clients = clients
        self.chain_params = chain_params
        self.node_alias = node_alias
        self.node_pubkey = node_pubkey
        self.version = version
        self.permissions = permissions
        self._teardown = teardown

    @property
    def client(self) -> LightningClient:
        return self._clients.lightning

    @property
    def versioner(self) -> VersionerClient:
        return self._clients.versioner

    @property
    def chain_notifier(self) -> ChainNotifierClient | None:
        return self._clients.chain_notifier

    @property
    def invoices(self) -> InvoicesClient | None:
        return self._clients.invoices

    @property
    def signer(self) -> SignerClient | None:
        return self._clients.signer

    @property
    def wallet_kit(self) -> WalletKitClient | None:
        return self._clients.wallet_kit

    @property
    def router(self) -> RouterClient | None:
        return self._clients.router

    @property
    def closed(self) -> bool:
        return self._teardown.done

    def client_for(self, domain: Domain) -> DomainClient:
        """The client for *domain*.

        Raises:
            PermissionDenied: if *domain* was not activated.
        """
        slots: dict[Domain, DomainClient | None] = {
            Domain.LIGHTNING: self._clients.lightning,
            Domain.READ_ONLY: self._clients.versioner,
            Domain.CHAIN_NOTIFIER: self._clients.chain_notifier,
            Domain.INVOICES: self._clients.invoices,
            Domain.SIGNER: self._clients.signer,
            Domain.WALLET_KIT: self._clients.wallet_kit,
            Domain.ROUTER: self._clients.router,
        }
        found = slots[domain]
        if found is None:
            raise PermissionDenied(domain.value)
        return found

    def available_clients(self) -> list[str]:
        """Names of the clients the loaded macaroons grant access to."""
        return [domain.value for domain in self.permissions.enabled_domains()]

    def close(self) -> None:
        """Close the channel, then wait for every client to shut down."""
        self._teardown()


def new_lnd_services(config: ServicesConfig) -> LndServices:
    """Connect to lnd, verify it, and activate the permitted clients.

    Raises:
        ConfigurationError: conflicting macaroon sources or unknown network.
        CredentialLoadError: unreadable TLS or read-only macaroon material.
        TransportError: dialing or a bootstrap RPC failed.
        NetworkMismatchError: lnd runs on a different network.
        VersionCheckUnavailable: lnd predates the version RPC.
        VersionIncompatible: lnd is older than ``config.check_version``.
        MissingFeatureTags: required build tags are not enabled.
        PermissionDenied: the admin macaroon is not available.
        SyncWaitFailed: the chain sync wait failed or was cancelled.
    """
    check_source_exclusivity(config)
    network = Network.parse(config.network)
    chain_params = network.chain_params()
    source = MacaroonSource.from_config(config)

    # The compatibility checks only need the read-only macaroon. Resolving
    # the rest first would give a cryptic error when a sub-server is off.
    readonly_macaroon = source.resolve(Domain.READ_ONLY)
    credentials = load_tls_credentials(config)

    channel = open_channel(config.lnd_address, credentials, config.dialer)

    compat = check_lnd_compatibility(
        channel,
        chain_params,
        readonly_macaroon,
        network.value,
        config.check_version,
        timeout=config.rpc_timeout,
    )

    teardown = Teardown(channel)
    try:
        permissions, macaroons = resolve_permissions(source, readonly_macaroon)
        clients = activate_clients(channel, chain_params, permissions, macaroons)
    except Exception:
        teardown()
        raise
    teardown.register(clients.shutdown_hooks)

    services = LndServices(
        clients=clients,
        chain_params=chain_params,
        node_alias=compat.alias,
        node_pubkey=compat.identity_pubkey,
        version=compat.version,
        permissions=permissions,
        teardown=teardown,
    )

    logger.info("Using network %s", network.value)

    if config.block_until_chain_synced:
        logger.info(
            "Waiting for lnd to be fully synced to its chain backend, this might take a while"
        )
        try:
            wait_for_chain_sync(
                services.client,
                poll_interval=config.chain_sync_poll_interval,
                rpc_timeout=config.rpc_timeout,
                cancel=config.chain_sync_cancel,
            )
        except BaseException:
            services.close()
            raise
        logger.info("lnd is now fully synced to its chain backend")

    return services
