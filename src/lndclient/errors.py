"""Exception taxonomy for the lnd bootstrap.

Every failure carries a ``category`` so operators can tell a configuration
mistake (fix the config) from a transient problem (retry later) from a
genuine incompatibility (upgrade lnd or change macaroons).
"""

from __future__ import annotations

from enum import StrEnum


class ErrorCategory(StrEnum):
    """Coarse classification of bootstrap failures."""

    CONFIGURATION = "configuration"
    TRANSIENT = "transient"
    INCOMPATIBLE = "incompatible"


class LndClientError(Exception):
    """Base class for all lndclient errors."""

    category: ErrorCategory = ErrorCategory.CONFIGURATION
    code: str = "LND_CLIENT_ERROR"


class ConfigurationError(LndClientError):
    """Conflicting or invalid credential source selection."""

    code = "CONFIGURATION_ERROR"


class CredentialLoadError(LndClientError):
    """TLS or macaroon material could not be read or is malformed."""

    code = "CREDENTIAL_LOAD_ERROR"


class TransportError(LndClientError):
    """Dialing the daemon or an RPC on the channel failed."""

    category = ErrorCategory.TRANSIENT
    code = "TRANSPORT_ERROR"


class NetworkMismatchError(LndClientError):
    """The daemon runs on a different network than configured."""

    category = ErrorCategory.INCOMPATIBLE
    code = "NETWORK_MISMATCH"

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"network mismatch with connected lnd node, wanted '{expected}', got '{actual}'"
        )


class VersionCheckUnavailable(LndClientError):
    """The daemon has no version endpoint (older than v0.10.0-beta)."""

    category = ErrorCategory.INCOMPATIBLE
    code = "VERSION_CHECK_UNAVAILABLE"

    def __init__(self) -> None:
        super().__init__(
            "version check not implemented, need minimum lnd version of v0.10.0-beta"
        )


class VersionIncompatible(LndClientError):
    """The daemon version is lower than the required minimum."""

    category = ErrorCategory.INCOMPATIBLE
    code = "VERSION_INCOMPATIBLE"


class MissingFeatureTags(LndClientError):
    """The daemon was built without some required build tags."""

    category = ErrorCategory.INCOMPATIBLE
    code = "MISSING_FEATURE_TAGS"

    def __init__(self, message: str, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(message)


class PermissionDenied(LndClientError):
    """A required domain is not authorized by the supplied macaroons."""

    code = "PERMISSION_DENIED"

    def __init__(self, domain: str, message: str | None = None) -> None:
        self.domain = domain
        super().__init__(
            message
            or f"required permissions for {domain} client not available, "
            "please use a different macaroon"
        )


class SyncWaitFailed(LndClientError):
    """Waiting for chain sync ended with a poll error or a cancellation."""

    category = ErrorCategory.TRANSIENT
    code = "SYNC_WAIT_FAILED"

    def __init__(self, message: str, *, cancelled: bool = False) -> None:
        self.cancelled = cancelled
        super().__init__(message)
