"""Registry of schema versions and the layout each one selects."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from sharehash_core.errors import UnsupportedSchemaVersion
from sharehash_core.share.models import (
    FlatPersonalInformation,
    StructuredPersonalInformation,
    _PIModel,
)


class SchemaLayout(str, Enum):
    """Tree shape used by a schema version."""

    flat = "flat"
    structured = "structured"


LAYOUT_MODELS: dict[SchemaLayout, type[_PIModel]] = {
    SchemaLayout.flat: FlatPersonalInformation,
    SchemaLayout.structured: StructuredPersonalInformation,
}

# Envelope keys in output order
ENVELOPE_KEYS = ("pi", "pubKey", "version", "type", "tag")


@dataclass(frozen=True)
class SchemaVersion:
    """One registered schema version."""

    version: str
    layout: SchemaLayout
    envelope_keys: tuple[str, ...]

    @property
    def model(self) -> type[_PIModel]:
        return LAYOUT_MODELS[self.layout]


CURRENT_SCHEMA_VERSION = "1.1.2"

_REGISTRY: dict[str, SchemaVersion] = {
    s.version: s
    for s in (
        SchemaVersion(
            version="1.0",
            layout=SchemaLayout.flat,
            envelope_keys=("pi", "pubKey", "version"),
        ),
        SchemaVersion(
            version="1.0.1",
            layout=SchemaLayout.flat,
            envelope_keys=("pi", "pubKey", "version", "type"),
        ),
        SchemaVersion(
            version=CURRENT_SCHEMA_VERSION,
            layout=SchemaLayout.structured,
            envelope_keys=ENVELOPE_KEYS,
        ),
    )
}


def supported_versions() -> tuple[str, ...]:
    """All registered version strings, oldest first."""
    return tuple(_REGISTRY)


def find_schema(version: str) -> SchemaVersion | None:
    """Return the registered schema for *version*, or None."""
    return _REGISTRY.get(version)


def get_schema(version: str) -> SchemaVersion:
    """Return the registered schema for *version*.

    Raises UnsupportedSchemaVersion for anything not in the registry; there
    is no fallback to a nearby version.
    """
    schema = _REGISTRY.get(version)
    if schema is None:
        raise UnsupportedSchemaVersion(version, supported_versions())
    return schema
