"""Protobuf message classes for the handful of lnd RPCs the bootstrap uses.

The messages are declared as descriptor tables and materialized through a
private :class:`~google.protobuf.descriptor_pool.DescriptorPool`, so no
generated ``*_pb2`` modules are required and a caller's own lnd stubs in the
default pool never collide with ours. Only the fields we read are declared;
protobuf keeps the rest as unknown fields.
"""

from __future__ import annotations

from typing import Any

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

_F = descriptor_pb2.FieldDescriptorProto

# (field name, number, type, repeated, message type name)
_FieldSpec = tuple[str, int, int, bool, str | None]

_FILES: dict[str, dict[str, list[_FieldSpec]]] = {
    "lnrpc": {
        "GetInfoRequest": [],
        "Chain": [
            ("chain", 1, _F.TYPE_STRING, False, None),
            ("network", 2, _F.TYPE_STRING, False, None),
        ],
        "GetInfoResponse": [
            ("identity_pubkey", 1, _F.TYPE_STRING, False, None),
            ("alias", 2, _F.TYPE_STRING, False, None),
            ("num_pending_channels", 3, _F.TYPE_UINT32, False, None),
            ("num_active_channels", 4, _F.TYPE_UINT32, False, None),
            ("num_peers", 5, _F.TYPE_UINT32, False, None),
            ("block_height", 6, _F.TYPE_UINT32, False, None),
            ("block_hash", 8, _F.TYPE_STRING, False, None),
            ("synced_to_chain", 9, _F.TYPE_BOOL, False, None),
            ("uris", 12, _F.TYPE_STRING, True, None),
            ("best_header_timestamp", 13, _F.TYPE_INT64, False, None),
            ("version", 14, _F.TYPE_STRING, False, None),
            ("num_inactive_channels", 15, _F.TYPE_UINT32, False, None),
            ("chains", 16, _F.TYPE_MESSAGE, True, ".lnrpc.Chain"),
            ("color", 17, _F.TYPE_STRING, False, None),
            ("synced_to_graph", 18, _F.TYPE_BOOL, False, None),
            ("commit_hash", 20, _F.TYPE_STRING, False, None),
        ],
    },
    "verrpc": {
        "VersionRequest": [],
        "Version": [
            ("commit", 1, _F.TYPE_STRING, False, None),
            ("commit_hash", 2, _F.TYPE_STRING, False, None),
            ("version", 3, _F.TYPE_STRING, False, None),
            ("app_major", 4, _F.TYPE_UINT32, False, None),
            ("app_minor", 5, _F.TYPE_UINT32, False, None),
            ("app_patch", 6, _F.TYPE_UINT32, False, None),
            ("app_pre_release", 7, _F.TYPE_STRING, False, None),
            ("build_tags", 8, _F.TYPE_STRING, True, None),
            ("go_version", 9, _F.TYPE_STRING, False, None),
        ],
    },
    "chainrpc": {
        "BlockEpoch": [
            ("hash", 1, _F.TYPE_BYTES, False, None),
            ("height", 2, _F.TYPE_UINT32, False, None),
        ],
    },
}

# Fully qualified gRPC method paths.
LIGHTNING_GET_INFO = "/lnrpc.Lightning/GetInfo"
VERSIONER_GET_VERSION = "/verrpc.Versioner/GetVersion"
CHAIN_NOTIFIER_REGISTER_BLOCK_EPOCH = "/chainrpc.ChainNotifier/RegisterBlockEpochNtfn"


def _build_pool() -> descriptor_pool.DescriptorPool:
    pool = descriptor_pool.DescriptorPool()
    for package, messages in _FILES.items():
        fdp = descriptor_pb2.FileDescriptorProto(
            name=f"lndclient/{package}.proto",
            package=package,
            syntax="proto3",
        )
        for message_name, fields in messages.items():
            message = fdp.message_type.add(name=message_name)
            for name, number, field_type, repeated, type_name in fields:
                field = message.field.add(
                    name=name,
                    number=number,
                    type=field_type,
                    label=_F.LABEL_REPEATED if repeated else _F.LABEL_OPTIONAL,
                )
                if type_name:
                    field.type_name = type_name
        pool.Add(fdp)
    return pool


_POOL = _build_pool()


def message_class(full_name: str) -> type[Any]:
    """Return the message class for e.g. ``"lnrpc.GetInfoResponse"``."""
    return message_factory.GetMessageClass(_POOL.FindMessageTypeByName(full_name))


GetInfoRequest = message_class("lnrpc.GetInfoRequest")
GetInfoResponse = message_class("lnrpc.GetInfoResponse")
Chain = message_class("lnrpc.Chain")
VersionRequest = message_class("verrpc.VersionRequest")
Version = message_class("verrpc.Version")
BlockEpoch = message_class("chainrpc.BlockEpoch")
