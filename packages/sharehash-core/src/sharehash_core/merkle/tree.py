"""Leaf and container hashing over share Merkle trees."""

from __future__ import annotations

import asyncio
import hashlib
from collections.abc import Sequence

from sharehash_core.merkle.models import MerkleContainer, MerkleDigest, MerkleItem, MerkleLeaf


def compute_hash(content: bytes) -> str:
    """SHA-256 hash as 64 lowercase hex characters."""
    return hashlib.sha256(content).hexdigest()


def leaf_hash(value: str | None) -> str:
    """Hash one scalar field. A missing value hashes as the empty string."""
    return compute_hash((value or "").encode("utf-8"))


def container_hash(child_hashes: Sequence[str]) -> str:
    """Compute a parent hash from child hashes in the order given.

    The hex digests are joined with no separator and the result is hashed.
    Order matters: permuting the children changes the hash.
    """
    return compute_hash("".join(child_hashes).encode("utf-8"))


def hash_node(node: MerkleItem) -> str:
    """Return the hash of *node*, discarding intermediate digests."""
    if isinstance(node, MerkleLeaf):
        return leaf_hash(node.value)
    return container_hash([hash_node(child) for child in node.children])


async def leaf_hash_async(value: str | None) -> str:
    """``leaf_hash`` run off the event loop."""
    return await asyncio.to_thread(leaf_hash, value)


async def hash_node_async(node: MerkleItem) -> str:
    """Async counterpart of ``hash_node``.

    Children of a container are hashed concurrently; ``asyncio.gather``
    returns results positionally, so the concatenation follows the declared
    child order regardless of which task finishes first.
    """
    if isinstance(node, MerkleLeaf):
        return await leaf_hash_async(node.value)
    child_hashes = await asyncio.gather(*(hash_node_async(c) for c in node.children))
    return container_hash(child_hashes)


def digest_tree(node: MerkleItem) -> MerkleDigest:
    """Hash *node* and keep every intermediate digest for inspection."""
    if isinstance(node, MerkleLeaf):
        return MerkleDigest(name=node.name, hash=leaf_hash(node.value))
    children = tuple(digest_tree(child) for child in node.children)
    return MerkleDigest(
        name=node.name,
        hash=container_hash([c.hash for c in children]),
        children=children,
    )


def leaf_container(name: str, value: str | None) -> MerkleContainer:
    """A container wrapping a single leaf of the same name."""
    return MerkleContainer(name=name, children=(MerkleLeaf(name=name, value=value),))
