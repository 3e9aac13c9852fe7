"""LightningClient — the core lnd RPC surface (``lnrpc.Lightning``)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel

from lndclient.clients.base import DomainClient
from lndclient.errors import TransportError
from lndclient.infrastructure.protos import LIGHTNING_GET_INFO, GetInfoRequest, GetInfoResponse

if TYPE_CHECKING:
    import grpc

    from lndclient.domain.network import ChainParams

# Compressed secp256k1 public key.
PUBKEY_LEN = 33


class NodeInfo(BaseModel):
    """The parts of ``GetInfo`` the bootstrap and its callers use."""

    model_config = {"frozen": True}

    alias: str
    identity_pubkey: bytes
    network: str
    synced_to_chain: bool
    synced_to_graph: bool = False
    block_height: int = 0
    block_hash: str = ""
    version: str = ""
    uris: tuple[str, ...] = ()

    @classmethod
    def from_message(cls, message: Any) -> NodeInfo:
        """Build from an ``lnrpc.GetInfoResponse``.

        Raises:
            TransportError: if lnd reported a malformed identity pubkey.
        """
        try:
            pubkey = bytes.fromhex(message.identity_pubkey)
        except ValueError as exc:
            msg = f"invalid identity pubkey from lnd: {message.identity_pubkey!r}"
            raise TransportError(msg) from exc
        if len(pubkey) != PUBKEY_LEN:
            msg = f"identity pubkey from lnd is {len(pubkey)} bytes, expected {PUBKEY_LEN}"
            raise TransportError(msg)

        network = message.chains[0].network if message.chains else ""
        return cls(
            alias=message.alias,
            identity_pubkey=pubkey,
            network=network,
            synced_to_chain=message.synced_to_chain,
            synced_to_graph=message.synced_to_graph,
            block_height=message.block_height,
            block_hash=message.block_hash,
            version=message.version,
            uris=tuple(message.uris),
        )


class LightningClient(DomainClient):
    """Core client; requires the admin macaroon outside of compatibility checks."""

    def __init__(self, channel: grpc.Channel, chain_params: ChainParams, macaroon: str) -> None:
        super().__init__(channel, macaroon)
        self.chain_params = chain_params

    def get_info(self, *, timeout: float | None = None) -> NodeInfo:
        response = self._unary(
            LIGHTNING_GET_INFO, GetInfoRequest(), GetInfoResponse, timeout=timeout
        )
        return NodeInfo.from_message(response)
