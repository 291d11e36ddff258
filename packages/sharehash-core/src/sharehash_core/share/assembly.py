"""Per-layout tree assembly for share fingerprints."""

from __future__ import annotations

import logging
from collections.abc import Callable

from sharehash_core.merkle import MerkleContainer, MerkleLeaf, leaf_container
from sharehash_core.share.models import (
    FlatPersonalInformation,
    StructuredPersonalInformation,
    _PIModel,
)
from sharehash_core.share.schema import SchemaLayout, get_schema

logger = logging.getLogger(__name__)

ROOT = "root"
PUBKEY = "pubkey"


def _group_container(name: str, group: _PIModel | None, group_type: type[_PIModel]) -> MerkleContainer:
    """Wrap every field of *group_type* as a leaf, in declaration order.

    The field list comes from the model class, not the instance, so a
    missing group still yields the full set of empty leaves.
    """
    leaves = []
    for field_name, field in group_type.model_fields.items():
        value = getattr(group, field_name) if group is not None else None
        leaves.append(MerkleLeaf(name=field.alias or field_name, value=value))
    return MerkleContainer(name=name, children=tuple(leaves))


def assemble_flat(public_key: str, pi: FlatPersonalInformation) -> MerkleContainer:
    """root = [name{name}, phone{phone}, pubkey{pubkey}]"""
    return MerkleContainer(
        name=ROOT,
        children=(
            leaf_container("name", pi.name),
            leaf_container("phone", pi.phone),
            leaf_container(PUBKEY, public_key),
        ),
    )


def assemble_structured(public_key: str, pi: StructuredPersonalInformation) -> MerkleContainer:
    """root = [name, contact, address, social, pubkey], one container per group."""
    groups = []
    for group_name, field in StructuredPersonalInformation.model_fields.items():
        group_type = _group_type(field.annotation)
        groups.append(_group_container(group_name, getattr(pi, group_name), group_type))
    groups.append(leaf_container(PUBKEY, public_key))
    return MerkleContainer(name=ROOT, children=tuple(groups))


def _group_type(annotation: object) -> type[_PIModel]:
    # Unwrap ``Group | None`` to ``Group``
    for arg in getattr(annotation, "__args__", (annotation,)):
        if isinstance(arg, type) and issubclass(arg, _PIModel):
            return arg
    raise TypeError(f"Not a personal-information group: {annotation!r}")


_ASSEMBLERS: dict[SchemaLayout, Callable[[str, _PIModel], MerkleContainer]] = {
    SchemaLayout.flat: assemble_flat,
    SchemaLayout.structured: assemble_structured,
}


def assemble(version: str, public_key: str, pi: object) -> MerkleContainer:
    """Build the unhashed tree for a record of schema *version*.

    Raises UnsupportedSchemaVersion when *version* is not registered.
    """
    schema = get_schema(version)
    if not isinstance(pi, schema.model):
        pi = schema.model.model_validate(pi or {})
    logger.debug("Assembling %s tree for schema %s", schema.layout.value, version)
    return _ASSEMBLERS[schema.layout](public_key, pi)
