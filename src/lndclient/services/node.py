"""NodeService — bootstrap-backed operations exposed by the CLI.

Every method bootstraps a fresh LndServices, reads what it needs, and
closes it again before returning a ServiceResult.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any

from lndclient.config.models import ServicesConfig
from lndclient.domain.permissions import Domain
from lndclient.domain.version import VersionDescriptor, version_string, version_string_short
from lndclient.errors import LndClientError
from lndclient.services.bootstrap import LndServices, new_lnd_services
from lndclient.services.result import ServiceResult

logger = logging.getLogger(__name__)

Bootstrap = Callable[[ServicesConfig], LndServices]


class NodeService:
    """Runs a bootstrap and summarizes the node behind it.

    Parameters:
        config: Bootstrap configuration.
        bootstrap: Factory for LndServices; replaceable in tests.
    """

    def __init__(self, config: ServicesConfig, bootstrap: Bootstrap = new_lnd_services) -> None:
        self._config = config
        self._bootstrap = bootstrap

    def _run(self, op: str, config: ServicesConfig) -> ServiceResult:
        started = time.perf_counter()
        try:
            services = self._bootstrap(config)
        except LndClientError as exc:
            logger.debug("Bootstrap for %s failed: %s", op, exc)
            return ServiceResult.failure(op, exc)

        try:
            data = _summarize(services)
        finally:
            services.close()

        warnings = [
            f"{domain.value} client disabled: macaroon not available"
            for domain in Domain
            if not services.permissions.allows(domain)
        ]
        elapsed_ms = round((time.perf_counter() - started) * 1000, 2)
        return ServiceResult(
            ok=True,
            op=op,
            data=data,
            warnings=warnings,
            meta={"duration_ms": elapsed_ms},
        )

    def status(self) -> ServiceResult:
        """Connect, run all checks, and report node identity and clients."""
        return self._run("status", self._config)

    def check_version(self, min_version: VersionDescriptor | None = None) -> ServiceResult:
        """Bootstrap against an explicit minimum version."""
        config = self._config
        if min_version is not None:
            config = config.model_copy(update={"check_version": min_version})
        return self._run("version", config)

    def wait_sync(self) -> ServiceResult:
        """Bootstrap and block until lnd is synced to its chain backend."""
        config = self._config.model_copy(update={"block_until_chain_synced": True})
        return self._run("wait_sync", config)


def _summarize(services: LndServices) -> dict[str, Any]:
    return {
        "alias": services.node_alias,
        "pubkey": services.node_pubkey.hex(),
        "chain": services.chain_params.name,
        "version": version_string_short(services.version),
        "version_detail": version_string(services.version),
        "build_tags": list(services.version.build_tags),
        "clients": services.available_clients(),
    }
