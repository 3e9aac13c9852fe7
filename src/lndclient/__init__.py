"""lndclient — authenticated, version-checked gRPC bootstrap for lnd."""

from __future__ import annotations

__version__ = "0.1.0"

from lndclient.config.models import ServicesConfig
from lndclient.domain.network import Network
from lndclient.domain.version import VersionDescriptor
from lndclient.errors import LndClientError
from lndclient.services.bootstrap import LndServices, new_lnd_services
from lndclient.services.sync import CancellationToken

__all__ = [
    "CancellationToken",
    "LndClientError",
    "LndServices",
    "Network",
    "ServicesConfig",
    "VersionDescriptor",
    "__version__",
    "new_lnd_services",
]
