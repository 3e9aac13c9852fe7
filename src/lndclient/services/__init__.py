"""Service layer — the bootstrap pipeline and the CLI-facing NodeService.

Services may import from domain, infrastructure and clients.
They must never import from commands or output.
"""
