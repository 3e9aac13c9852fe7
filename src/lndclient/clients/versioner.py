"""Verifies the lnd version over ``verrpc.Versioner`` (read-only macaroon)."""

from __future__ import annotations

from lndclient.clients.base import DomainClient
from lndclient.domain.version import VersionDescriptor
from lndclient.infrastructure.protos import VERSIONER_GET_VERSION, Version, VersionRequest


class VersionerClient(DomainClient):
    def get_version(self, *, timeout: float | None = None) -> VersionDescriptor:
        response = self._unary(VERSIONER_GET_VERSION, VersionRequest(), Version, timeout=timeout)
        return VersionDescriptor.from_message(response)
