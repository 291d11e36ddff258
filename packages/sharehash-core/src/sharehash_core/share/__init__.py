"""Share records, schema versions and per-version tree assembly."""

from sharehash_core.share.assembly import assemble, assemble_flat, assemble_structured
from sharehash_core.share.models import (
    AddressGroup,
    ContactGroup,
    FlatPersonalInformation,
    NameGroup,
    PersonalInformation,
    ShareKind,
    SocialGroup,
    StructuredPersonalInformation,
)
from sharehash_core.share.schema import (
    CURRENT_SCHEMA_VERSION,
    SchemaLayout,
    SchemaVersion,
    find_schema,
    get_schema,
    supported_versions,
)
from sharehash_core.share.share import Share, clean_public_key

__all__ = [
    "AddressGroup",
    "CURRENT_SCHEMA_VERSION",
    "ContactGroup",
    "FlatPersonalInformation",
    "NameGroup",
    "PersonalInformation",
    "SchemaLayout",
    "SchemaVersion",
    "Share",
    "ShareKind",
    "SocialGroup",
    "StructuredPersonalInformation",
    "assemble",
    "assemble_flat",
    "assemble_structured",
    "clean_public_key",
    "find_schema",
    "get_schema",
    "supported_versions",
]
