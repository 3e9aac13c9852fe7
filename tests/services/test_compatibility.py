"""Tests for the compatibility gate."""

from __future__ import annotations

import grpc
import pytest

from lndclient.clients.versioner import VersionerClient
from lndclient.domain.network import Network
from lndclient.domain.version import MINIMAL_COMPATIBLE_VERSION, VersionDescriptor
from lndclient.errors import (
    ErrorCategory,
    MissingFeatureTags,
    NetworkMismatchError,
    TransportError,
    VersionCheckUnavailable,
    VersionIncompatible,
)
from lndclient.infrastructure import protos
from lndclient.services.compatibility import check_lnd_compatibility, check_version_compatibility
from tests.conftest import (
    NODE_PUBKEY_HEX,
    FakeChannel,
    FakeRpcError,
    healthy_channel,
    version_response,
)

REGTEST = Network.REGTEST.chain_params()


def run_check(
    channel: FakeChannel,
    network: str = "regtest",
    min_version: VersionDescriptor = MINIMAL_COMPATIBLE_VERSION,
):
    return check_lnd_compatibility(channel, REGTEST, "0f0f", network, min_version)


def raising(exc: Exception):
    def handler(*_: object) -> object:
        raise exc

    return handler


class TestCheckLndCompatibility:
    def test_success_returns_static_node_facts(self) -> None:
        channel = healthy_channel(alias="alice")
        result = run_check(channel)
        assert result.alias == "alice"
        assert result.identity_pubkey == bytes.fromhex(NODE_PUBKEY_HEX)
        assert result.version.triple == (0, 17, 0)
        assert channel.close_count == 0

    def test_only_readonly_macaroon_is_used(self) -> None:
        channel = healthy_channel()
        run_check(channel)
        assert [metadata for _, metadata, _ in channel.calls] == [{"macaroon": "0f0f"}] * 2

    def test_network_mismatch_closes_channel(self) -> None:
        channel = healthy_channel(network="mainnet")
        with pytest.raises(NetworkMismatchError, match="wanted 'regtest', got 'mainnet'") as excinfo:
            run_check(channel)
        assert excinfo.value.category is ErrorCategory.INCOMPATIBLE
        assert channel.close_count == 1
        assert channel.count(protos.VERSIONER_GET_VERSION) == 0

    def test_get_info_failure_is_transport_error(self) -> None:
        channel = healthy_channel()
        channel.handlers[protos.LIGHTNING_GET_INFO] = raising(
            FakeRpcError(grpc.StatusCode.UNAVAILABLE, "connection refused")
        )
        with pytest.raises(TransportError, match="unable to get info"):
            run_check(channel)
        assert channel.close_count == 1

    def test_unimplemented_version_endpoint(self) -> None:
        channel = healthy_channel()
        channel.handlers[protos.VERSIONER_GET_VERSION] = raising(
            FakeRpcError(grpc.StatusCode.UNIMPLEMENTED, "unknown service verrpc.Versioner")
        )
        with pytest.raises(VersionCheckUnavailable, match="v0.10.0-beta") as excinfo:
            run_check(channel)
        assert not isinstance(excinfo.value, TransportError)
        assert channel.close_count == 1

    def test_other_version_failure_is_transport_error(self) -> None:
        channel = healthy_channel()
        channel.handlers[protos.VERSIONER_GET_VERSION] = raising(
            FakeRpcError(grpc.StatusCode.DEADLINE_EXCEEDED, "deadline")
        )
        with pytest.raises(TransportError, match="GetVersion error"):
            run_check(channel)
        assert channel.close_count == 1

    def test_old_version_is_incompatible(self) -> None:
        channel = healthy_channel()
        channel.handlers[protos.VERSIONER_GET_VERSION] = lambda *_: version_response(0, 10, 9)
        with pytest.raises(VersionIncompatible, match="v0.11.0"):
            run_check(channel)
        assert channel.close_count == 1

    def test_missing_build_tags(self) -> None:
        channel = healthy_channel()
        channel.handlers[protos.VERSIONER_GET_VERSION] = lambda *_: version_response(
            tags=("walletrpc",)
        )
        with pytest.raises(MissingFeatureTags, match="at least version") as excinfo:
            run_check(channel)
        assert excinfo.value.missing == ["chainrpc", "invoicesrpc", "signrpc"]
        assert channel.close_count == 1

    def test_custom_minimum_version(self) -> None:
        channel = healthy_channel()
        required = VersionDescriptor(app_major=0, app_minor=18, app_patch=0)
        with pytest.raises(VersionIncompatible):
            run_check(channel, min_version=required)


class TestCheckVersionCompatibility:
    def test_passes_timeout_through(self) -> None:
        channel = FakeChannel({protos.VERSIONER_GET_VERSION: lambda *_: version_response()})
        check_version_compatibility(
            VersionerClient(channel, "aa"), MINIMAL_COMPATIBLE_VERSION, timeout=1.5
        )
        assert channel.calls[0][2] == 1.5

