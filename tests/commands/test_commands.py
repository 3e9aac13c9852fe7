"""End-to-end tests for the lndclient CLI commands.

The default dialer is swapped for one handing out a FakeChannel, so each
command runs the real bootstrap pipeline without an lnd node.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
from click.testing import CliRunner

from lndclient import __version__
from lndclient.cli import cli
from lndclient.infrastructure import connection
from tests.conftest import FakeChannel, healthy_channel


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = logging.getLogger("lndclient").level
    yield
    root.handlers = handlers
    logging.getLogger("lndclient").setLevel(level)


@pytest.fixture
def lnd_toml(tmp_path: Path, macaroon_dir: Path, tls_cert: Path) -> Path:
    path = tmp_path / "lndclient.toml"
    path.write_text(
        "[lnd]\n"
        'network = "regtest"\n'
        f'macaroon_dir = "{macaroon_dir}"\n'
        f'tls_path = "{tls_cert}"\n'
        "rpc_timeout = 2.0\n"
        "chain_sync_poll_interval = 0.01\n"
    )
    return path


@pytest.fixture
def serve(monkeypatch: pytest.MonkeyPatch) -> Callable[[FakeChannel], FakeChannel]:
    """Route the default dialer to the given channel."""

    def install(channel: FakeChannel) -> FakeChannel:
        monkeypatch.setattr(connection, "default_dialer", lambda *_: channel)
        return channel

    return install


# --- Root group ---


def test_cli_help(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "lndclient" in result.output


def test_cli_version(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, ["--version"])
    assert result.exit_code == 0
    assert __version__ in result.output


def test_cli_no_args(cli_runner: CliRunner) -> None:
    result = cli_runner.invoke(cli, [])
    assert result.exit_code == 0
    assert "Usage" in result.output


@pytest.mark.parametrize("name", ["status", "version", "wait-sync"])
def test_commands_registered(cli_runner: CliRunner, name: str) -> None:
    result = cli_runner.invoke(cli, [name, "--help"])
    assert result.exit_code == 0


@pytest.mark.parametrize(
    ("args", "expected"),
    [
        (["status", "--examples"], "lndclient --json status"),
        (["version", "--examples"], "--min-version v0.15.0"),
        (["wait-sync", "--examples"], "lndclient wait-sync"),
    ],
    ids=["status", "version", "wait-sync"],
)
def test_examples(cli_runner: CliRunner, args: list[str], expected: str) -> None:
    result = cli_runner.invoke(cli, args)
    assert result.exit_code == 0
    assert "Examples for" in result.output
    assert expected in result.output


# --- status ---


class TestStatus:
    def test_human_output(
        self, cli_runner: CliRunner, lnd_toml: Path, serve: Callable[[FakeChannel], FakeChannel]
    ) -> None:
        channel = serve(healthy_channel(alias="alice"))
        result = cli_runner.invoke(cli, ["-c", str(lnd_toml), "status"])

        assert result.exit_code == 0, result.output
        assert "OK" in result.output
        assert "alias: alice" in result.output
        assert "v0.17.0" in result.output
        assert channel.close_count == 1

    def test_json_output(
        self, cli_runner: CliRunner, lnd_toml: Path, serve: Callable[[FakeChannel], FakeChannel]
    ) -> None:
        serve(healthy_channel())
        result = cli_runner.invoke(cli, ["--json", "-c", str(lnd_toml), "status"])

        assert result.exit_code == 0, result.output
        parsed = json.loads(result.output)
        assert parsed["ok"] is True
        assert parsed["op"] == "status"
        assert parsed["data"]["chain"] == "regtest"

    def test_quiet_output(
        self, cli_runner: CliRunner, lnd_toml: Path, serve: Callable[[FakeChannel], FakeChannel]
    ) -> None:
        serve(healthy_channel())
        result = cli_runner.invoke(cli, ["-q", "-c", str(lnd_toml), "status"])
        assert result.exit_code == 0
        assert result.output.strip() == "OK: status"

    def test_network_mismatch_exits_1(
        self, cli_runner: CliRunner, lnd_toml: Path, serve: Callable[[FakeChannel], FakeChannel]
    ) -> None:
        channel = serve(healthy_channel(network="testnet"))
        result = cli_runner.invoke(cli, ["-c", str(lnd_toml), "status"])

        assert result.exit_code == 1
        assert "ERROR" in result.output
        assert "network mismatch" in result.output
        assert "NETWORK_MISMATCH" in result.output
        assert channel.close_count == 1


# --- version ---


class TestVersion:
    def test_compatible(
        self, cli_runner: CliRunner, lnd_toml: Path, serve: Callable[[FakeChannel], FakeChannel]
    ) -> None:
        serve(healthy_channel())
        result = cli_runner.invoke(
            cli, ["-c", str(lnd_toml), "version", "--min-version", "v0.15.0", "--tag", "signrpc"]
        )
        assert result.exit_code == 0, result.output
        assert "build tags" in result.output

    def test_too_old(
        self, cli_runner: CliRunner, lnd_toml: Path, serve: Callable[[FakeChannel], FakeChannel]
    ) -> None:
        serve(healthy_channel())
        result = cli_runner.invoke(
            cli, ["-c", str(lnd_toml), "version", "--min-version", "v0.18.0"]
        )
        assert result.exit_code == 1
        assert "at least version" in result.output

    def test_missing_tag(
        self, cli_runner: CliRunner, lnd_toml: Path, serve: Callable[[FakeChannel], FakeChannel]
    ) -> None:
        serve(healthy_channel())
        result = cli_runner.invoke(cli, ["-c", str(lnd_toml), "version", "--tag", "peersrpc"])
        assert result.exit_code == 1
        assert "peersrpc" in result.output

    def test_malformed_min_version(self, cli_runner: CliRunner, lnd_toml: Path) -> None:
        result = cli_runner.invoke(
            cli, ["-c", str(lnd_toml), "version", "--min-version", "latest"]
        )
        assert result.exit_code == 2
        assert "--min-version" in result.output


# --- wait-sync ---


class TestWaitSync:
    def test_returns_once_synced(
        self, cli_runner: CliRunner, lnd_toml: Path, serve: Callable[[FakeChannel], FakeChannel]
    ) -> None:
        from lndclient.infrastructure import protos
        from tests.conftest import get_info_response

        channel = serve(healthy_channel())
        polls = iter([False, False, True])
        channel.handlers[protos.LIGHTNING_GET_INFO] = lambda *_: get_info_response(
            synced=next(polls, True)
        )

        result = cli_runner.invoke(cli, ["-q", "-c", str(lnd_toml), "wait-sync"])

        assert result.exit_code == 0, result.output
        assert result.output.strip() == "OK: wait_sync"
        assert channel.close_count == 1


# --- global overrides ---


def test_network_flag_overrides_toml(
    cli_runner: CliRunner, lnd_toml: Path, serve: Callable[[FakeChannel], FakeChannel]
) -> None:
    serve(healthy_channel(network="regtest"))
    result = cli_runner.invoke(cli, ["-c", str(lnd_toml), "--network", "testnet", "status"])
    assert result.exit_code == 1
    assert "wanted 'testnet', got 'regtest'" in result.output


def test_address_flag_reaches_dialer(
    cli_runner: CliRunner,
    lnd_toml: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    channel = healthy_channel()
    targets: list[str] = []

    def dialer(target: str, *_: object) -> FakeChannel:
        targets.append(target)
        return channel

    monkeypatch.setattr(connection, "default_dialer", dialer)
    result = cli_runner.invoke(
        cli, ["-q", "-c", str(lnd_toml), "--address", "node.example", "status"]
    )
    assert result.exit_code == 0, result.output
    assert targets == ["node.example"]
