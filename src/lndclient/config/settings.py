"""CLI settings: flags, ``LNDCLIENT_*`` env vars and ``lndclient.toml``.

Priority (highest first): init kwargs from Click, env vars (``__`` nests
into sections, e.g. ``LNDCLIENT_LND__NETWORK``), the TOML file, then the
defaults on :class:`LndSection`. Sources are deep-merged, so a flag that
sets one ``[lnd]`` key leaves the others from env/TOML intact.
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from lndclient.config.discovery import find_config
from lndclient.config.models import (
    DEFAULT_CHAIN_SYNC_POLL_INTERVAL,
    DEFAULT_RPC_TIMEOUT,
    ServicesConfig,
)
from lndclient.domain.cancellation import CancellationToken
from lndclient.domain.version import DEFAULT_BUILD_TAGS, VersionDescriptor

# [lnd] keys holding filesystem paths; relative values are anchored at the
# directory of the TOML file that set them.
PATH_KEYS = ("macaroon_dir", "macaroon_path", "tls_path")


class LndSection(BaseModel):
    """The ``[lnd]`` table."""

    model_config = {"frozen": True}

    address: str = "localhost:10009"
    network: str = "mainnet"
    macaroon_dir: str | None = None
    macaroon_path: str | None = None
    tls_path: str | None = None
    min_version: str = "v0.11.0"
    build_tags: list[str] = Field(default_factory=lambda: list(DEFAULT_BUILD_TAGS))
    rpc_timeout: float = DEFAULT_RPC_TIMEOUT
    chain_sync_poll_interval: float = DEFAULT_CHAIN_SYNC_POLL_INTERVAL


def _anchor_paths(section: dict[str, Any], base: Path) -> dict[str, Any]:
    anchored = dict(section)
    for key in PATH_KEYS:
        value = anchored.get(key)
        if isinstance(value, str) and value:
            path = Path(value).expanduser()
            anchored[key] = str(path if path.is_absolute() else base / path)
    return anchored


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings read from one ``lndclient.toml``.

    Raises:
        click.ClickException: if the file is not valid TOML or has a table
            lndclient does not know.
    """

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None or not toml_path.is_file():
            return

        try:
            data = tomllib.loads(toml_path.read_text(encoding="utf-8"))
        except tomllib.TOMLDecodeError as exc:
            raise click.ClickException(f"Invalid TOML in {toml_path}: {exc}") from exc

        unknown = sorted(set(data) - set(settings_cls.model_fields))
        if unknown:
            raise click.ClickException(
                f"Unknown section(s) in {toml_path}: {', '.join(unknown)}"
            )
        if isinstance(data.get("lnd"), dict):
            data["lnd"] = _anchor_paths(data["lnd"], toml_path.parent)
        self._data = data

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# from_cli() parks the chosen TOML path here for settings_customise_sources().
_pending = threading.local()


class LndSettings(BaseSettings):
    """Merged settings for one CLI invocation.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
        lnd: Connection and compatibility options for the bootstrap.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "LNDCLIENT_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    lnd: LndSection = Field(default_factory=LndSection)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlSettingsSource(settings_cls, getattr(_pending, "toml_path", None))
        return init_settings, env_settings, toml

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        start: Path | None = None,
        **cli_flags: Any,
    ) -> LndSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist means "no file"; it
        never falls back to discovery. Otherwise ``lndclient.toml`` is
        looked up from *start* (default: cwd).
        """
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config(start)

        _pending.toml_path = toml_path
        try:
            return cls(config_path=toml_path, **cli_flags)
        finally:
            _pending.toml_path = None

    def to_services_config(
        self,
        *,
        min_version: VersionDescriptor | None = None,
        block_until_chain_synced: bool = False,
        chain_sync_cancel: CancellationToken | None = None,
    ) -> ServicesConfig:
        """Translate the ``[lnd]`` table into a bootstrap config.

        Raises:
            click.BadParameter: if ``lnd.min_version`` is malformed.
        """
        lnd = self.lnd
        if min_version is None:
            try:
                min_version = VersionDescriptor.parse(
                    lnd.min_version, build_tags=tuple(lnd.build_tags)
                )
            except ValueError as exc:
                raise click.BadParameter(str(exc), param_hint="lnd.min_version") from exc
        return ServicesConfig(
            lnd_address=lnd.address,
            network=lnd.network,
            macaroon_dir=lnd.macaroon_dir,
            custom_macaroon_path=lnd.macaroon_path,
            tls_path=lnd.tls_path,
            check_version=min_version,
            block_until_chain_synced=block_until_chain_synced,
            chain_sync_cancel=chain_sync_cancel,
            rpc_timeout=lnd.rpc_timeout,
            chain_sync_poll_interval=lnd.chain_sync_poll_interval,
        )
