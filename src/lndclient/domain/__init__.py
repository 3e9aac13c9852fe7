"""Domain layer: value types for networks, versions and permissions.

This layer depends only on stdlib, pydantic and ``lndclient.errors``.
It must never import from services, infrastructure, clients, commands, or config.
"""
