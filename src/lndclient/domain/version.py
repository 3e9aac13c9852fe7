"""lnd version descriptors and the compatibility rules applied to them."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from lndclient.errors import MissingFeatureTags, VersionIncompatible

# Sub-server build tags lndclient needs for its full feature set.
DEFAULT_BUILD_TAGS: tuple[str, ...] = ("signrpc", "walletrpc", "chainrpc", "invoicesrpc")


class VersionDescriptor(BaseModel):
    """An lnd version: numeric triple, build tags and build metadata."""

    model_config = {"frozen": True}

    app_major: int = 0
    app_minor: int = 0
    app_patch: int = 0
    build_tags: tuple[str, ...] = Field(default_factory=tuple)
    app_pre_release: str = ""
    commit: str = ""
    commit_hash: str = ""
    version: str = ""
    go_version: str = ""

    @property
    def triple(self) -> tuple[int, int, int]:
        return (self.app_major, self.app_minor, self.app_patch)

    @classmethod
    def parse(cls, text: str, build_tags: tuple[str, ...] = ()) -> VersionDescriptor:
        """Parse ``v0.11.0`` / ``0.11.0-beta`` style strings."""
        core = text.strip().removeprefix("v")
        core, _, pre_release = core.partition("-")
        parts = core.split(".")
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            msg = f"invalid version string: {text!r}"
            raise ValueError(msg)
        major, minor, patch = (int(p) for p in parts)
        return cls(
            app_major=major,
            app_minor=minor,
            app_patch=patch,
            app_pre_release=pre_release,
            build_tags=tuple(build_tags),
        )

    @classmethod
    def from_message(cls, message: Any) -> VersionDescriptor:
        """Build a descriptor from a ``verrpc.Version`` protobuf message."""
        return cls(
            app_major=message.app_major,
            app_minor=message.app_minor,
            app_patch=message.app_patch,
            build_tags=tuple(message.build_tags),
            app_pre_release=message.app_pre_release,
            commit=message.commit,
            commit_hash=message.commit_hash,
            version=message.version,
            go_version=message.go_version,
        )


MINIMAL_COMPATIBLE_VERSION = VersionDescriptor(
    app_major=0,
    app_minor=11,
    app_patch=0,
    build_tags=DEFAULT_BUILD_TAGS,
)


def version_string_short(version: VersionDescriptor) -> str:
    return f"v{version.app_major}.{version.app_minor}.{version.app_patch}"


def version_string(version: VersionDescriptor) -> str:
    """Human readable version including commit and build tags."""
    tags = ",".join(version.build_tags)
    return f"{version_string_short(version)} commit={version.commit}, build tags '{tags}'"


def is_version_compatible(actual: VersionDescriptor, expected: VersionDescriptor) -> bool:
    """Compare the parts one by one; the first differing part decides."""
    for have, want in zip(actual.triple, expected.triple, strict=True):
        if have != want:
            return have > want
    return True


def assert_version_compatible(actual: VersionDescriptor, expected: VersionDescriptor) -> None:
    """Raise VersionIncompatible if *actual* is older than *expected*."""
    if not is_version_compatible(actual, expected):
        msg = (
            f"error checking connected lnd version. at least version "
            f'"{version_string(expected)}" is required, got "{version_string_short(actual)}"'
        )
        raise VersionIncompatible(msg)


def missing_build_tags(actual: VersionDescriptor, required: tuple[str, ...]) -> list[str]:
    enabled = set(actual.build_tags)
    return sorted({tag for tag in required if tag not in enabled})


def assert_build_tags_enabled(actual: VersionDescriptor, required: tuple[str, ...]) -> None:
    """Raise MissingFeatureTags unless every tag in *required* is enabled."""
    missing = missing_build_tags(actual, required)
    if missing:
        msg = f"build tags missing: {','.join(missing)}"
        raise MissingFeatureTags(msg, missing)
