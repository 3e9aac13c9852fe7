"""Work out which domains the supplied macaroons unlock."""

from __future__ import annotations

import logging

from lndclient.domain.permissions import Domain, PermissionSet, flag_for
from lndclient.errors import CredentialLoadError, PermissionDenied
from lndclient.infrastructure.credentials import MacaroonPouch, MacaroonSource

logger = logging.getLogger(__name__)


def resolve_permissions(
    source: MacaroonSource, readonly_macaroon: str
) -> tuple[PermissionSet, MacaroonPouch]:
    """Attempt to resolve a macaroon for every domain.

    *readonly_macaroon* is the one the compatibility check already used; it
    is reused as is, so read-only access is always enabled. Every other
    domain is enabled iff its macaroon resolves. Failures for optional
    domains disable them and are logged; a failure for the core domain
    raises.

    Raises:
        PermissionDenied: if the core (admin) macaroon cannot be resolved.
    """
    flags: dict[str, bool] = {flag_for(Domain.READ_ONLY): True}
    macaroons: dict[Domain, str] = {Domain.READ_ONLY: readonly_macaroon}

    for domain in Domain:
        if domain is Domain.READ_ONLY:
            continue
        try:
            macaroons[domain] = source.resolve(domain)
        except CredentialLoadError as exc:
            if domain is Domain.LIGHTNING:
                raise PermissionDenied(
                    domain.value,
                    f"required permissions for main lightning client not available, "
                    f"please use a different macaroon: {exc}",
                ) from exc
            logger.debug("Client %s disabled: %s", domain.value, exc)
            flags[flag_for(domain)] = False
        else:
            flags[flag_for(domain)] = True

    permissions = PermissionSet(**flags)
    logger.debug(
        "Resolved permissions: %s",
        ", ".join(d.value for d in permissions.enabled_domains()),
    )
    return permissions, MacaroonPouch(macaroons)
