"""JSON envelope codec for shares.

The envelope carries raw fields only. The hash is never serialized; the
receiver recomputes it.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sharehash_core.errors import MalformedEnvelope
from sharehash_core.share.models import ShareKind, _PIModel
from sharehash_core.share.schema import CURRENT_SCHEMA_VERSION, ENVELOPE_KEYS, find_schema
from sharehash_core.share.share import Share

logger = logging.getLogger(__name__)


class EnvelopeModel(BaseModel):
    """Top-level shape of an incoming envelope."""

    model_config = ConfigDict(extra="ignore")

    pi: dict[str, Any]
    pub_key: str = Field(alias="pubKey")
    version: str | None = None
    type: ShareKind | None = None
    tag: str | None = None

    @field_validator("version", "type", "tag", mode="before")
    @classmethod
    def _empty_as_missing(cls, v: Any) -> Any:
        return None if v == "" else v

    @field_validator("pi", "pub_key")
    @classmethod
    def _encodable(cls, v: Any) -> Any:
        # Lone surrogates from JSON escapes cannot be hashed as UTF-8
        _check_utf8(v)
        return v


def _check_utf8(value: Any) -> None:
    if isinstance(value, str):
        value.encode("utf-8")
    elif isinstance(value, dict):
        for k, v in value.items():
            _check_utf8(k)
            _check_utf8(v)
    elif isinstance(value, list):
        for v in value:
            _check_utf8(v)


def _pi_payload(pi: Any) -> Any:
    if isinstance(pi, _PIModel):
        return pi.model_dump(by_alias=True, exclude_none=True)
    if isinstance(pi, Mapping):
        return {k: _pi_payload(v) for k, v in pi.items()}
    if isinstance(pi, tuple):
        return [_pi_payload(v) for v in pi]
    return pi


def to_dict(share: Share) -> dict[str, Any]:
    """Envelope fields for *share*, limited to the keys its schema defines."""
    schema = find_schema(share.schema_version)
    keys = schema.envelope_keys if schema is not None else ENVELOPE_KEYS
    values = {
        "pi": _pi_payload(share.personal_information),
        "pubKey": share.public_key,
        "version": share.schema_version,
        "type": share.kind.value,
        "tag": share.tag,
    }
    return {k: values[k] for k in ENVELOPE_KEYS if k in keys}


def serialize(share: Share, indent: int | None = None, sort_keys: bool = False) -> str:
    """Encode *share* as envelope text."""
    separators = (",", ":") if indent is None else None
    return json.dumps(
        to_dict(share),
        indent=indent,
        separators=separators,
        sort_keys=sort_keys,
        ensure_ascii=False,
    )


def from_dict(data: Any) -> Share:
    """Build a Share from an already-parsed envelope object."""
    if not isinstance(data, dict):
        raise MalformedEnvelope(f"expected a JSON object, got {type(data).__name__}")

    unknown = set(data) - set(ENVELOPE_KEYS)
    if unknown:
        logger.debug("Ignoring unknown envelope keys: %s", ", ".join(sorted(unknown)))

    try:
        env = EnvelopeModel.model_validate(data)
    except ValidationError as e:
        raise MalformedEnvelope(_summarize(e)) from e

    try:
        return Share(
            public_key=env.pub_key,
            personal_information=env.pi,
            schema_version=env.version or CURRENT_SCHEMA_VERSION,
            kind=env.type or ShareKind.personal,
            tag=env.tag or "",
        )
    except ValidationError as e:
        raise MalformedEnvelope(f"pi: {_summarize(e)}") from e


def deserialize(text: str | bytes) -> Share:
    """Decode envelope text into a Share.

    Raises MalformedEnvelope when the text is not JSON or not a share record.
    """
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedEnvelope(f"invalid JSON: {e}") from e
    return from_dict(data)


def _summarize(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(p) for p in err["loc"]) or "<root>"
        parts.append(f"{loc}: {err['msg']}")
    return "; ".join(parts)
