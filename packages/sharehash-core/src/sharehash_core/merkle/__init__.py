"""Merkle tree primitives for share fingerprints."""

from sharehash_core.merkle.models import MerkleContainer, MerkleDigest, MerkleItem, MerkleLeaf
from sharehash_core.merkle.tree import (
    compute_hash,
    container_hash,
    digest_tree,
    hash_node,
    hash_node_async,
    leaf_container,
    leaf_hash,
    leaf_hash_async,
)

__all__ = [
    "MerkleContainer",
    "MerkleDigest",
    "MerkleItem",
    "MerkleLeaf",
    "compute_hash",
    "container_hash",
    "digest_tree",
    "hash_node",
    "hash_node_async",
    "leaf_container",
    "leaf_hash",
    "leaf_hash_async",
]
