from typing import Literal

from pydantic import BaseModel, Field, field_validator

from sharehash_core.share.schema import CURRENT_SCHEMA_VERSION, find_schema, supported_versions


class EnvelopeConfig(BaseModel):
    indent: int | None = Field(default=None, ge=0)
    sort_keys: bool = False


class ShareHashConfig(BaseModel):
    default_version: str = CURRENT_SCHEMA_VERSION
    envelope: EnvelopeConfig = Field(default_factory=EnvelopeConfig)
    log_level: Literal["debug", "info", "warn", "error"] = "warn"

    @field_validator("default_version")
    @classmethod
    def validate_default_version(cls, v: str) -> str:
        if find_schema(v) is None:
            raise ValueError(
                f"unknown schema version {v!r} (supported: {', '.join(supported_versions())})"
            )
        return v
