"""The Share record and its content fingerprint."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from functools import cached_property
from types import MappingProxyType
from typing import Any

from sharehash_core.merkle import MerkleContainer, MerkleDigest, digest_tree, hash_node, hash_node_async
from sharehash_core.share.assembly import assemble
from sharehash_core.share.models import PersonalInformation, ShareKind, _PIModel
from sharehash_core.share.schema import CURRENT_SCHEMA_VERSION, find_schema

logger = logging.getLogger(__name__)

_NEWLINE_RE = re.compile(r"\r\n|\n|\r")


def clean_public_key(public_key: str) -> str:
    """Strip CR, LF and CRLF sequences from a public key."""
    return _NEWLINE_RE.sub("", public_key)


def _freeze(value: Any) -> Any:
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(_freeze(v) for v in value)
    return value


@dataclass(frozen=True)
class Share:
    """A personal-information record bound to a public key.

    Immutable once built. ``schema_version`` selects the personal-information
    layout and the hashing tree; it is never inferred from the data. A share
    with an unregistered version can still be built and serialized, but
    hashing it raises UnsupportedSchemaVersion. Its raw personal information
    is stored as a read-only mapping.
    """

    public_key: str
    personal_information: PersonalInformation | Mapping[str, Any] = field(hash=False)
    schema_version: str = CURRENT_SCHEMA_VERSION
    kind: ShareKind = ShareKind.personal
    tag: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "public_key", clean_public_key(self.public_key))
        object.__setattr__(self, "kind", ShareKind(self.kind))
        object.__setattr__(self, "personal_information", self._coerce_pi(self.personal_information))

    def _coerce_pi(self, pi: Any) -> PersonalInformation | Mapping[str, Any]:
        schema = find_schema(self.schema_version)
        if schema is None:
            # Kept read-only so the record can still be stored and forwarded
            return pi if isinstance(pi, _PIModel) else _freeze(dict(pi or {}))
        if isinstance(pi, _PIModel):
            if not isinstance(pi, schema.model):
                raise ValueError(
                    f"Schema {self.schema_version} expects {schema.model.__name__}, "
                    f"got {type(pi).__name__}"
                )
            return pi
        return schema.model.model_validate(pi or {})

    # ------------------------------------------------------------------
    # Hashing
    # ------------------------------------------------------------------

    def tree(self) -> MerkleContainer:
        """The unhashed Merkle tree for this share."""
        return assemble(self.schema_version, self.public_key, self.personal_information)

    @cached_property
    def hash(self) -> str:
        """Root hash of the share's Merkle tree, as 64 lowercase hex chars."""
        root = hash_node(self.tree())
        logger.debug("Share hash %s (schema %s)", root, self.schema_version)
        return root

    async def async_hash(self) -> str:
        """Same digest as ``hash``, computed through the async evaluator."""
        return await hash_node_async(self.tree())

    def digest(self) -> MerkleDigest:
        """Hash the tree and keep every container and leaf digest."""
        return digest_tree(self.tree())

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_envelope(self, indent: int | None = None, sort_keys: bool = False) -> str:
        from sharehash_core.envelope.codec import serialize

        return serialize(self, indent=indent, sort_keys=sort_keys)

    @classmethod
    def from_envelope(cls, text: str | bytes) -> Share:
        from sharehash_core.envelope.codec import deserialize

        return deserialize(text)
