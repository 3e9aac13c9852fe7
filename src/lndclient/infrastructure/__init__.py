"""Credentials, the gRPC channel and protobuf messages.

This layer depends on stdlib and third-party libs (grpcio, protobuf).
It may read domain constants but must never import from services,
clients, commands, or output.
"""
