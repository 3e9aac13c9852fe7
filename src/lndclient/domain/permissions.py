"""Functional domains (lnd sub-servers) and the permissions that gate them."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel


class Domain(StrEnum):
    """Independently authorizable groups of lnd RPCs.

    Values are the client names reported by ``available_clients()``.
    """

    LIGHTNING = "lightning"
    WALLET_KIT = "walletkit"
    ROUTER = "router"
    SIGNER = "signer"
    INVOICES = "invoices"
    CHAIN_NOTIFIER = "chainnotifier"
    READ_ONLY = "readonly"


# Macaroon file lnd bakes for each domain inside its macaroon directory.
MACAROON_FILENAMES: dict[Domain, str] = {
    Domain.LIGHTNING: "admin.macaroon",
    Domain.READ_ONLY: "readonly.macaroon",
    Domain.INVOICES: "invoices.macaroon",
    Domain.CHAIN_NOTIFIER: "chainnotifier.macaroon",
    Domain.WALLET_KIT: "walletkit.macaroon",
    Domain.ROUTER: "router.macaroon",
    Domain.SIGNER: "signer.macaroon",
}


class PermissionSet(BaseModel):
    """Which domains the caller's macaroons authorize. Frozen once derived."""

    model_config = {"frozen": True}

    lightning: bool = False
    wallet_kit: bool = False
    chain_notifier: bool = False
    signer: bool = False
    invoices: bool = False
    router: bool = False
    read_only: bool = False

    def allows(self, domain: Domain) -> bool:
        return bool(getattr(self, _FLAG_FOR_DOMAIN[domain]))

    def enabled_domains(self) -> list[Domain]:
        """Enabled domains in reporting order."""
        return [domain for domain in Domain if self.allows(domain)]


_FLAG_FOR_DOMAIN: dict[Domain, str] = {
    Domain.LIGHTNING: "lightning",
    Domain.WALLET_KIT: "wallet_kit",
    Domain.ROUTER: "router",
    Domain.SIGNER: "signer",
    Domain.INVOICES: "invoices",
    Domain.CHAIN_NOTIFIER: "chain_notifier",
    Domain.READ_ONLY: "read_only",
}


def flag_for(domain: Domain) -> str:
    """Name of the PermissionSet field gating *domain*."""
    return _FLAG_FOR_DOMAIN[domain]
