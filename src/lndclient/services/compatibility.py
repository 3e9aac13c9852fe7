"""Compatibility gate: network, version and build tag checks.

Runs with the read-only macaroon only, before any other client is trusted.
Pipeline: GET_INFO → NETWORK → GET_VERSION → VERSION → BUILD_TAGS
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, NamedTuple

import grpc

from lndclient.clients.lightning import LightningClient
from lndclient.clients.versioner import VersionerClient
from lndclient.domain.version import (
    VersionDescriptor,
    assert_build_tags_enabled,
    assert_version_compatible,
    version_string,
)
from lndclient.errors import (
    MissingFeatureTags,
    NetworkMismatchError,
    TransportError,
    VersionCheckUnavailable,
)

if TYPE_CHECKING:
    from lndclient.domain.network import ChainParams

logger = logging.getLogger(__name__)


class CompatibilityResult(NamedTuple):
    """Static node facts worth caching once the checks pass."""

    alias: str
    identity_pubkey: bytes
    version: VersionDescriptor


def check_version_compatibility(
    client: VersionerClient,
    expected: VersionDescriptor,
    *,
    timeout: float | None = None,
) -> VersionDescriptor:
    """Query the node version and check it against *expected*.

    Raises:
        VersionCheckUnavailable: the node predates the version RPC.
        TransportError: the version RPC failed for any other reason.
        VersionIncompatible: the node is older than *expected*.
        MissingFeatureTags: required build tags are not enabled.
    """
    try:
        version = client.get_version(timeout=timeout)
    except grpc.RpcError as exc:
        # The version service was only added in lnd v0.10.0.
        if exc.code() == grpc.StatusCode.UNIMPLEMENTED:
            raise VersionCheckUnavailable() from exc
        msg = f"GetVersion error: {exc.details() or exc}"
        raise TransportError(msg) from exc

    logger.info("lnd version: %s", version_string(version))

    assert_version_compatible(version, expected)
    try:
        assert_build_tags_enabled(version, expected.build_tags)
    except MissingFeatureTags as exc:
        msg = (
            f"error checking connected lnd version. at least version "
            f'"{version_string(expected)}" is required ({exc})'
        )
        raise MissingFeatureTags(msg, exc.missing) from exc

    return version


def close_channel(channel: grpc.Channel) -> None:
    """Close *channel*, logging rather than raising on failure."""
    try:
        channel.close()
    except Exception:
        logger.error("Error closing lnd connection", exc_info=True)


def check_lnd_compatibility(
    channel: grpc.Channel,
    chain_params: ChainParams,
    readonly_macaroon: str,
    network: str,
    min_version: VersionDescriptor,
    *,
    timeout: float | None = None,
) -> CompatibilityResult:
    """Verify network and version of the node behind *channel*.

    The channel is closed before any error propagates, so no half-checked
    connection escapes.
    """
    lightning = LightningClient(channel, chain_params, readonly_macaroon)
    versioner = VersionerClient(channel, readonly_macaroon)

    try:
        try:
            info = lightning.get_info(timeout=timeout)
        except grpc.RpcError as exc:
            msg = f"unable to get info for lnd node: {exc.details() or exc}"
            raise TransportError(msg) from exc

        if info.network != network:
            raise NetworkMismatchError(network, info.network)

        version = check_version_compatibility(versioner, min_version, timeout=timeout)
    except Exception:
        close_channel(channel)
        raise

    return CompatibilityResult(info.alias, info.identity_pubkey, version)
