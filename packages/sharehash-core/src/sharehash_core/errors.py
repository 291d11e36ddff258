"""Exception hierarchy for share hashing and envelope decoding."""

from __future__ import annotations


class ShareHashError(Exception):
    """Base class for errors raised by sharehash_core."""


class MalformedEnvelope(ShareHashError):
    """The envelope text is not a valid share record."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Malformed envelope: {reason}")


class UnsupportedSchemaVersion(ShareHashError):
    """No tree-assembly rule is registered for the schema version."""

    def __init__(self, version: str, supported: tuple[str, ...] = ()) -> None:
        self.version = version
        self.supported = supported
        msg = f"Unsupported schema version {version!r}"
        if supported:
            msg += f" (supported: {', '.join(supported)})"
        super().__init__(msg)
