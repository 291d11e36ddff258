"""ShareHash Core - content fingerprints and envelopes for personal-information shares."""

from sharehash_core.config import ShareHashConfig, load_config
from sharehash_core.envelope import deserialize, serialize
from sharehash_core.errors import MalformedEnvelope, ShareHashError, UnsupportedSchemaVersion
from sharehash_core.merkle import container_hash, leaf_hash
from sharehash_core.share import (
    CURRENT_SCHEMA_VERSION,
    FlatPersonalInformation,
    Share,
    ShareKind,
    StructuredPersonalInformation,
    supported_versions,
)

__version__ = "0.1.0"

__all__ = [
    "CURRENT_SCHEMA_VERSION",
    "FlatPersonalInformation",
    "MalformedEnvelope",
    "Share",
    "ShareHashConfig",
    "ShareHashError",
    "ShareKind",
    "StructuredPersonalInformation",
    "UnsupportedSchemaVersion",
    "container_hash",
    "deserialize",
    "leaf_hash",
    "load_config",
    "serialize",
    "supported_versions",
]
