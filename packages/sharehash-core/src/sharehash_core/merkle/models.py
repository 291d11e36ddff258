"""Data models for the Merkle tree subsystem."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

_HEX64_RE = re.compile(r"[a-f0-9]{64}")


@dataclass(frozen=True)
class MerkleLeaf:
    """A single scalar field; ``None`` hashes the same as the empty string."""

    name: str
    value: str | None = None


@dataclass(frozen=True)
class MerkleContainer:
    """An ordered group of leaves and/or nested containers."""

    name: str
    children: tuple[MerkleItem, ...] = ()


MerkleItem = Union[MerkleLeaf, MerkleContainer]


@dataclass(frozen=True)
class MerkleDigest:
    """A hashed node, as returned by ``digest_tree`` for inspection."""

    name: str
    hash: str
    children: tuple[MerkleDigest, ...] = ()

    def __post_init__(self) -> None:
        if not _HEX64_RE.fullmatch(self.hash):
            raise ValueError(f"hash must be 64-char hex, got {self.hash!r}")

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def find(self, name: str) -> MerkleDigest | None:
        """Return the first node named *name* in depth-first order."""
        if self.name == name:
            return self
        for child in self.children:
            found = child.find(name)
            if found is not None:
                return found
        return None
