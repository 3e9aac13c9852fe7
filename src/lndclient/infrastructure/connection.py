"""gRPC channel establishment with a pluggable dialer.

The channel is opened lazily by grpc; identity, network and version of the
daemon are verified afterwards by the compatibility check over this same
channel.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from typing import Any

import grpc

from lndclient.domain.network import DEFAULT_RPC_PORT
from lndclient.errors import TransportError

logger = logging.getLogger(__name__)

# Largest message the client accepts: 200 MiB. Not configurable.
MAX_MSG_RECV_SIZE = 200 * 1024 * 1024

ChannelOptions = Sequence[tuple[str, Any]]

# (target, credentials, options) -> channel. A dialer must open the channel
# with every option it is handed: they carry the MAX_MSG_RECV_SIZE ceiling,
# which callers cannot change or drop. default_dialer passes them to grpc.
Dialer = Callable[[str, grpc.ChannelCredentials, ChannelOptions], grpc.Channel]

_LOCAL_PREFIXES = ("unix:", "unix-abstract:", "vsock:")


def client_address(address: str, default_port: str = DEFAULT_RPC_PORT) -> str:
    """Normalize *address* into a grpc target.

    Local socket targets pass through untouched; a bare host gets lnd's
    default RPC port appended.
    """
    if address.startswith(_LOCAL_PREFIXES):
        return address
    if address.startswith("/"):
        return f"unix:{address}"
    if address.startswith("["):
        # Bracketed IPv6 with or without a port.
        return address if "]:" in address else f"{address}:{default_port}"
    if address.count(":") == 1:
        return address
    if address.count(":") > 1:
        return f"[{address}]:{default_port}"
    return f"{address}:{default_port}"


def default_dialer(
    target: str,
    credentials: grpc.ChannelCredentials,
    options: ChannelOptions,
) -> grpc.Channel:
    """Open a TLS secured channel over TCP or a unix socket."""
    return grpc.secure_channel(client_address(target), credentials, options=list(options))


def channel_options() -> list[tuple[str, Any]]:
    return [("grpc.max_receive_message_length", MAX_MSG_RECV_SIZE)]


def open_channel(
    address: str,
    credentials: grpc.ChannelCredentials,
    dialer: Dialer | None = None,
) -> grpc.Channel:
    """Dial *address* and return the shared channel.

    The dialer always receives :func:`channel_options`; a custom dialer is
    responsible for applying them to the channel it opens.

    Raises:
        TransportError: if the dialer fails.
    """
    dial = dialer or default_dialer
    logger.info("Creating lnd connection to %s", address)
    try:
        channel = dial(address, credentials, channel_options())
    except TransportError:
        raise
    except Exception as exc:
        msg = f"unable to connect to RPC server: {exc}"
        raise TransportError(msg) from exc
    logger.info("Connected to lnd")
    return channel
