"""Macaroon and TLS credential loading.

Macaroons are treated as opaque bytes and hex encoded for the ``macaroon``
gRPC metadata header. TLS material becomes grpc channel credentials.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import grpc

from lndclient.domain.network import default_macaroon_dir, default_tls_cert_path
from lndclient.domain.permissions import MACAROON_FILENAMES, Domain
from lndclient.errors import ConfigurationError, CredentialLoadError

if TYPE_CHECKING:
    from lndclient.config.models import ServicesConfig

logger = logging.getLogger(__name__)

_PEM_CERT_MARKER = b"-----BEGIN CERTIFICATE-----"


def serialize_macaroon(raw: bytes) -> str:
    """Hex encode macaroon bytes for the ``macaroon`` metadata header."""
    return raw.hex()


def check_source_exclusivity(config: ServicesConfig) -> None:
    """Reject a config naming both a macaroon directory and a macaroon file.

    Raw macaroon bytes override both, so the combination is only an error
    when no raw bytes are given.
    """
    if (
        config.custom_macaroon is None
        and config.macaroon_dir is not None
        and config.custom_macaroon_path is not None
    ):
        msg = (
            "if custom_macaroon is not provided, must set either "
            "macaroon_dir or custom_macaroon_path but not both"
        )
        raise ConfigurationError(msg)


def resolve_macaroon_dir(config: ServicesConfig) -> Path:
    """Configured macaroon directory, or lnd's default for the network."""
    if config.macaroon_dir is not None:
        return config.macaroon_dir
    return default_macaroon_dir(config.network)


def load_macaroon(directory: Path | None, filename: str, custom_path: Path | None) -> str:
    """Read one macaroon file and return it serialized.

    *custom_path*, when set, wins over ``directory / filename``.

    Raises:
        CredentialLoadError: if the file is missing, unreadable, or empty.
    """
    if custom_path is not None:
        path = custom_path
    elif directory is not None:
        path = directory / filename
    else:
        msg = f"no macaroon source configured for {filename}"
        raise CredentialLoadError(msg)

    try:
        raw = path.read_bytes()
    except OSError as exc:
        msg = f"unable to read macaroon path {path}: {exc}"
        raise CredentialLoadError(msg) from exc
    if not raw:
        msg = f"macaroon file {path} is empty"
        raise CredentialLoadError(msg)
    return serialize_macaroon(raw)


@dataclass(frozen=True)
class MacaroonSource:
    """Where macaroons come from: a directory, one file, or raw bytes."""

    directory: Path | None = None
    custom_path: Path | None = None
    raw: bytes | None = None

    @classmethod
    def from_config(cls, config: ServicesConfig) -> MacaroonSource:
        """Validate source selection and pin the directory, if one is used.

        Raises:
            ConfigurationError: on conflicting sources or an unknown network.
        """
        check_source_exclusivity(config)
        if config.custom_macaroon is not None:
            return cls(raw=config.custom_macaroon)
        if config.custom_macaroon_path is not None:
            return cls(custom_path=config.custom_macaroon_path)
        return cls(directory=resolve_macaroon_dir(config))

    def resolve(self, domain: Domain) -> str:
        """Serialized macaroon authorizing *domain*.

        Raises:
            CredentialLoadError: if the macaroon cannot be loaded.
        """
        if self.raw is not None:
            return serialize_macaroon(self.raw)
        return load_macaroon(self.directory, MACAROON_FILENAMES[domain], self.custom_path)


@dataclass(frozen=True)
class MacaroonPouch:
    """Resolved macaroons, keyed by domain."""

    macaroons: dict[Domain, str] = field(default_factory=dict)

    def __contains__(self, domain: object) -> bool:
        return domain in self.macaroons

    def get(self, domain: Domain) -> str:
        try:
            return self.macaroons[domain]
        except KeyError:
            msg = f"no macaroon resolved for {domain.value}"
            raise CredentialLoadError(msg) from None


def load_raw_tls(raw_tls: bytes) -> grpc.ChannelCredentials:
    if _PEM_CERT_MARKER not in raw_tls:
        msg = "could not append raw tls cert to x509 certpool: no PEM certificate found"
        raise CredentialLoadError(msg)
    return grpc.ssl_channel_credentials(root_certificates=raw_tls)


def load_tls_from_file(tls_path: Path | None) -> grpc.ChannelCredentials:
    path = tls_path or default_tls_cert_path()
    try:
        pem = path.read_bytes()
    except OSError as exc:
        msg = f"unable to load tls credentials: {exc}"
        raise CredentialLoadError(msg) from exc
    return load_raw_tls(pem)


def load_tls_credentials(config: ServicesConfig) -> grpc.ChannelCredentials:
    """Channel credentials from raw PEM bytes, else from the TLS file.

    Raises:
        CredentialLoadError: if the material is unreadable or not PEM.
    """
    if config.raw_tls is not None:
        logger.debug("Using raw TLS certificate bytes")
        return load_raw_tls(config.raw_tls)
    return load_tls_from_file(config.tls_path)
