"""Tests for Share construction and fingerprinting."""

from __future__ import annotations

import dataclasses

import pytest
from pydantic import ValidationError

from sharehash_core.errors import UnsupportedSchemaVersion
from sharehash_core.merkle import container_hash, hash_node, leaf_hash
from sharehash_core.share import (
    CURRENT_SCHEMA_VERSION,
    ContactGroup,
    FlatPersonalInformation,
    NameGroup,
    SchemaLayout,
    Share,
    ShareKind,
    StructuredPersonalInformation,
    assemble,
    clean_public_key,
    get_schema,
    supported_versions,
)

STRUCTURED_REFERENCE_HASH = "4f03b998eb2b215c1db5b912e7cede5c299dcbca20a3f323bcd078abfe0cd092"
FLAT_REFERENCE_HASH = "e5233d4ae22718229d007670b6caec27b6b7ad8b5c829b77386b711f3d027fdd"


# ── Reference vectors ────────────────────────────────────────────────


def test_structured_reference_vector(structured_share):
    assert structured_share.hash == STRUCTURED_REFERENCE_HASH


def test_flat_reference_vector(flat_share):
    assert flat_share.hash == FLAT_REFERENCE_HASH


def test_flat_reference_vector_sparse_and_clean_key():
    """Omitted phone + clean key hashes like empty phone + key with newline."""
    share = Share("KEY1", {"name": "Ann"}, schema_version="1.0")
    assert share.hash == FLAT_REFERENCE_HASH


def test_flat_versions_share_tree_shape():
    pi = {"name": "Ann", "phone": "555"}
    assert Share("K", pi, schema_version="1.0").hash == Share("K", pi, schema_version="1.0.1").hash


def test_structured_hash_recomputed_by_hand():
    share = Share("PK", {"address": {"city": "Oslo"}})
    e = leaf_hash("")
    expected = container_hash([
        container_hash([e, e]),
        container_hash([e, e]),
        container_hash([e, leaf_hash("Oslo"), e, e]),
        container_hash([e, e, e]),
        container_hash([leaf_hash("PK")]),
    ])
    assert share.hash == expected


# ── Determinism and absence ──────────────────────────────────────────


def test_hash_deterministic(full_structured_share):
    rebuilt = Share(
        full_structured_share.public_key,
        full_structured_share.personal_information,
        kind=full_structured_share.kind,
        tag=full_structured_share.tag,
    )
    assert full_structured_share.hash == rebuilt.hash
    assert full_structured_share.hash == hash_node(full_structured_share.tree())


@pytest.mark.parametrize(
    "explicit, omitted",
    [
        ({"name": {"firstName": "Ann", "lastName": ""}}, {"name": {"firstName": "Ann"}}),
        ({"name": {"firstName": "Ann"}, "social": {}}, {"name": {"firstName": "Ann"}}),
        ({"contact": {"email": None, "phone": "1"}}, {"contact": {"phone": "1"}}),
        ({}, {"name": {}, "contact": {}, "address": {}, "social": {}}),
    ],
)
def test_structured_absence_equivalence(explicit, omitted):
    assert Share("K", explicit).hash == Share("K", omitted).hash


def test_flat_absence_equivalence():
    assert (
        Share("K", {"name": "", "phone": ""}, schema_version="1.0").hash
        == Share("K", {}, schema_version="1.0").hash
    )


def test_sparse_share_keeps_full_tree_shape():
    tree = Share("K", {}).tree()
    assert [c.name for c in tree.children] == ["name", "contact", "address", "social", "pubkey"]
    assert [len(c.children) for c in tree.children] == [2, 2, 4, 3, 1]


def test_leaf_order_within_groups():
    tree = Share("K", {}).tree()
    names = [[leaf.name for leaf in c.children] for c in tree.children]
    assert names == [
        ["firstName", "lastName"],
        ["email", "phone"],
        ["address", "city", "state", "zip"],
        ["facebook", "twitter", "instagram"],
        ["pubkey"],
    ]


def test_flat_tree_shape():
    tree = Share("K", {"name": "Ann"}, schema_version="1.0").tree()
    assert [c.name for c in tree.children] == ["name", "phone", "pubkey"]
    assert all(len(c.children) == 1 for c in tree.children)


# ── Order and field sensitivity ──────────────────────────────────────


def test_swapping_sibling_values_changes_hash():
    a = Share("K", {"contact": {"email": "x", "phone": "y"}})
    b = Share("K", {"contact": {"email": "y", "phone": "x"}})
    assert a.hash != b.hash


def test_moving_value_between_groups_changes_hash():
    a = Share("K", {"contact": {"phone": "555"}})
    b = Share("K", {"address": {"zip": "555"}})
    assert a.hash != b.hash


def test_single_leaf_change_is_local(full_structured_share):
    pi = full_structured_share.personal_information
    changed_pi = pi.model_copy(update={"contact": ContactGroup(email="other@example.com", phone=pi.contact.phone)})
    changed = Share(full_structured_share.public_key, changed_pi)

    before, after = full_structured_share.digest(), changed.digest()
    assert before.hash != after.hash
    assert before.find("contact").hash != after.find("contact").hash
    for group in ("name", "address", "social", "pubkey"):
        assert before.find(group).hash == after.find(group).hash


def test_public_key_change_is_local():
    a = Share("K1", {"name": {"firstName": "Ann"}})
    b = Share("K2", {"name": {"firstName": "Ann"}})
    assert a.hash != b.hash
    assert a.digest().find("name").hash == b.digest().find("name").hash


def test_no_case_or_whitespace_normalization():
    base = Share("K", {"name": {"firstName": "Ann"}}).hash
    assert Share("K", {"name": {"firstName": "ann"}}).hash != base
    assert Share("K", {"name": {"firstName": "Ann "}}).hash != base


# ── Public key normalization ─────────────────────────────────────────


@pytest.mark.parametrize("raw", ["KEY1\n", "KEY1\r", "KEY1\r\n", "KE\nY1", "\r\nK\rE\nY1\r\n"])
def test_public_key_newlines_stripped(raw):
    assert clean_public_key(raw) == "KEY1"
    share = Share(raw, {"name": {"firstName": "Ann"}, "contact": {"email": "a@x.com"}})
    assert share.public_key == "KEY1"
    assert share.hash == STRUCTURED_REFERENCE_HASH


def test_public_key_other_whitespace_kept():
    assert Share("KEY1 ", {}).hash != Share("KEY1", {}).hash
    assert clean_public_key("a\tb") == "a\tb"


# ── Metadata is not hashed ───────────────────────────────────────────


def test_kind_and_tag_excluded_from_hash(structured_share):
    tagged = Share(
        structured_share.public_key,
        structured_share.personal_information,
        kind=ShareKind.alias,
        tag="friends",
    )
    assert tagged.hash == structured_share.hash


# ── Async path ───────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_async_hash_matches_sync(full_structured_share, flat_share):
    assert await full_structured_share.async_hash() == full_structured_share.hash
    assert await flat_share.async_hash() == flat_share.hash


@pytest.mark.asyncio
async def test_async_hash_unsupported_version():
    with pytest.raises(UnsupportedSchemaVersion):
        await Share("K", {}, schema_version="0.9").async_hash()


# ── Construction ─────────────────────────────────────────────────────


def test_defaults():
    share = Share("K", {})
    assert share.schema_version == CURRENT_SCHEMA_VERSION == "1.1.2"
    assert share.kind is ShareKind.personal
    assert share.tag == ""
    assert isinstance(share.personal_information, StructuredPersonalInformation)


def test_kind_coerced_from_string():
    assert Share("K", {}, kind="alias").kind is ShareKind.alias
    with pytest.raises(ValueError):
        Share("K", {}, kind="robot")


def test_snake_and_camel_field_names_accepted():
    a = Share("K", {"name": {"firstName": "Ann", "lastName": "Lee"}})
    b = Share("K", {"name": {"first_name": "Ann", "last_name": "Lee"}})
    assert a.personal_information == b.personal_information
    assert a.hash == b.hash


def test_model_instances_accepted():
    pi = StructuredPersonalInformation(name=NameGroup(first_name="Ann"), contact=ContactGroup(email="a@x.com"))
    assert Share("KEY1", pi).hash == STRUCTURED_REFERENCE_HASH
    assert Share("KEY1\n", FlatPersonalInformation(name="Ann"), schema_version="1.0").hash == FLAT_REFERENCE_HASH


def test_wrong_layout_model_rejected():
    with pytest.raises(ValueError, match="expects FlatPersonalInformation"):
        Share("K", StructuredPersonalInformation(), schema_version="1.0")


def test_invalid_leaf_type_rejected():
    with pytest.raises(ValidationError):
        Share("K", {"name": {"firstName": 42}})
    with pytest.raises(ValidationError):
        Share("K", {"name": {"firstName": "Ann"}}, schema_version="1.0")


def test_unknown_pi_keys_ignored():
    a = Share("K", {"name": {"firstName": "Ann", "middleName": "B"}, "pets": ["cat"]})
    assert a.hash == Share("K", {"name": {"firstName": "Ann"}}).hash


def test_share_is_immutable(structured_share):
    with pytest.raises(dataclasses.FrozenInstanceError):
        structured_share.tag = "x"
    with pytest.raises(ValidationError):
        structured_share.personal_information.name = None


def test_hash_is_memoized(structured_share):
    first = structured_share.hash
    assert structured_share.__dict__["hash"] == first
    assert structured_share.hash is first


# ── Schema versions ──────────────────────────────────────────────────


def test_supported_versions():
    assert supported_versions() == ("1.0", "1.0.1", "1.1.2")
    assert get_schema("1.0").layout is SchemaLayout.flat
    assert get_schema("1.1.2").layout is SchemaLayout.structured


def test_unsupported_version_constructs_but_fails_to_hash():
    share = Share("K", {"name": "Ann", "extra": 1}, schema_version="2.0")
    assert share.personal_information == {"name": "Ann", "extra": 1}
    with pytest.raises(UnsupportedSchemaVersion) as exc_info:
        share.hash
    assert exc_info.value.version == "2.0"
    assert "1.1.2" in exc_info.value.supported


def test_unsupported_version_share_is_read_only():
    raw = {"name": "Ann", "groups": [{"x": "1"}]}
    share = Share("K", raw, schema_version="2.0")
    raw["name"] = "Bob"
    assert share.personal_information["name"] == "Ann"
    with pytest.raises(TypeError):
        share.personal_information["name"] = "Bob"
    with pytest.raises(TypeError):
        share.personal_information["groups"][0]["x"] = "2"


def test_shares_are_hashable_objects():
    unknown = Share("K", {"name": "Ann"}, schema_version="2.0")
    again = Share("K", {"name": "Ann"}, schema_version="2.0")
    assert unknown == again
    assert hash(unknown) == hash(again)
    assert len({Share("K", {}), Share("K", {})}) == 1


@pytest.mark.parametrize("version", ["1", "1.1", "1.1.2 ", "v1.1.2", ""])
def test_no_nearest_version_fallback(version):
    with pytest.raises(UnsupportedSchemaVersion):
        get_schema(version)


def test_assemble_dispatches_on_version_not_data():
    """Flat-looking data under a structured version is not reinterpreted."""
    with pytest.raises(ValidationError):
        assemble("1.1.2", "K", {"name": "Ann"})
    tree = assemble("1.0", "K", {"name": "Ann"})
    assert [c.name for c in tree.children] == ["name", "phone", "pubkey"]
