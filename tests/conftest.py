"""Shared pytest fixtures and fakes for lndclient tests.

No lnd daemon is needed: :class:`FakeChannel` stands in for a grpc channel
and serves canned protobuf responses per method path.
"""

from __future__ import annotations

import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

import grpc
import pytest
from click.testing import CliRunner

from lndclient.config.models import ServicesConfig
from lndclient.domain.permissions import MACAROON_FILENAMES
from lndclient.infrastructure import protos

FAKE_PEM = b"-----BEGIN CERTIFICATE-----\nMIIBfake\n-----END CERTIFICATE-----\n"
NODE_PUBKEY_HEX = "02" + "ab" * 32


class FakeRpcError(grpc.RpcError):
    """An RpcError carrying a status code, like grpc's own call errors."""

    def __init__(self, code: grpc.StatusCode, details: str = "") -> None:
        super().__init__(details)
        self._code = code
        self._details = details

    def code(self) -> grpc.StatusCode:
        return self._code

    def details(self) -> str:
        return self._details


Handler = Callable[[Any, Any, Any], Any]


class FakeStream:
    """Iterable unary-stream call that can be cancelled."""

    def __init__(self, items: Iterable[Any], block_until_cancel: bool = False) -> None:
        self._items = list(items)
        self._block = block_until_cancel
        self._cancelled = threading.Event()

    def cancel(self) -> None:
        self._cancelled.set()

    def __iter__(self) -> Any:
        yield from self._items
        if self._block:
            self._cancelled.wait(5)
            raise FakeRpcError(grpc.StatusCode.CANCELLED, "Locally cancelled")


class FakeChannel:
    """Minimal stand-in for ``grpc.Channel``.

    ``handlers`` maps a method path to ``handler(request, metadata, timeout)``
    returning a response message or raising. Responses go through the real
    serializer/deserializer pair so the message classes are exercised.
    """

    def __init__(self, handlers: dict[str, Handler] | None = None) -> None:
        self.handlers: dict[str, Handler] = dict(handlers or {})
        self.calls: list[tuple[str, dict[str, str], float | None]] = []
        self.close_count = 0
        self.events: list[str] | None = None

    def unary_unary(self, method: str, request_serializer: Any, response_deserializer: Any):
        def call(request: Any, metadata: Any = None, timeout: float | None = None) -> Any:
            request_serializer(request)
            self.calls.append((method, dict(metadata or ()), timeout))
            response = self.handlers[method](request, metadata, timeout)
            return response_deserializer(response.SerializeToString())

        return call

    def unary_stream(self, method: str, request_serializer: Any, response_deserializer: Any):
        def call(request: Any, metadata: Any = None, timeout: float | None = None) -> Any:
            self.calls.append((method, dict(metadata or ()), timeout))
            return self.handlers[method](request, metadata, timeout)

        return call

    def close(self) -> None:
        self.close_count += 1
        if self.events is not None:
            self.events.append("close")

    def count(self, method: str) -> int:
        return sum(1 for m, _, _ in self.calls if m == method)


def get_info_response(
    *,
    network: str = "regtest",
    alias: str = "alice",
    synced: bool = True,
    block_height: int = 100,
) -> Any:
    return protos.GetInfoResponse(
        identity_pubkey=NODE_PUBKEY_HEX,
        alias=alias,
        synced_to_chain=synced,
        block_height=block_height,
        chains=[protos.Chain(chain="bitcoin", network=network)],
    )


def version_response(
    major: int = 0,
    minor: int = 17,
    patch: int = 0,
    tags: Iterable[str] = ("signrpc", "walletrpc", "chainrpc", "invoicesrpc", "routerrpc"),
) -> Any:
    return protos.Version(
        app_major=major,
        app_minor=minor,
        app_patch=patch,
        build_tags=list(tags),
        commit="v0.17.0-beta",
    )


def healthy_channel(**info_kwargs: Any) -> FakeChannel:
    """A channel whose node passes every compatibility check."""
    return FakeChannel(
        {
            protos.LIGHTNING_GET_INFO: lambda *_: get_info_response(**info_kwargs),
            protos.VERSIONER_GET_VERSION: lambda *_: version_response(),
        }
    )


def write_macaroons(directory: Path, names: Iterable[str] | None = None) -> Path:
    """Write fake macaroon files; *names* defaults to every known file."""
    directory.mkdir(parents=True, exist_ok=True)
    for name in names if names is not None else MACAROON_FILENAMES.values():
        (directory / name).write_bytes(name.encode())
    return directory


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def macaroon_dir(tmp_path: Path) -> Path:
    """Directory holding every macaroon lnd bakes."""
    return write_macaroons(tmp_path / "macaroons")


@pytest.fixture
def tls_cert(tmp_path: Path) -> Path:
    path = tmp_path / "tls.cert"
    path.write_bytes(FAKE_PEM)
    return path


@pytest.fixture
def dial_into() -> Callable[[FakeChannel], Any]:
    """Build a dialer that hands out the given FakeChannel."""

    def factory(channel: FakeChannel) -> Any:
        def dialer(target: str, credentials: Any, options: Any) -> FakeChannel:
            channel.dialed = (target, list(options))  # type: ignore[attr-defined]
            return channel

        return dialer

    return factory


@pytest.fixture
def make_config(macaroon_dir: Path, tls_cert: Path) -> Callable[..., ServicesConfig]:
    """ServicesConfig pointing at the fake macaroons and certificate."""

    def factory(**overrides: Any) -> ServicesConfig:
        values: dict[str, Any] = {
            "lnd_address": "localhost:10009",
            "network": "regtest",
            "macaroon_dir": macaroon_dir,
            "tls_path": tls_cert,
            "rpc_timeout": 2.0,
            "chain_sync_poll_interval": 0.01,
        }
        values.update(overrides)
        return ServicesConfig(**values)

    return factory
