"""Personal-information models for each schema layout."""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ShareKind(str, Enum):
    """Classification carried alongside a share. Never hashed."""

    personal = "personal"
    alias = "alias"


class _PIModel(BaseModel):
    # snake_case in Python, camelCase on the wire; unknown keys are dropped
    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="ignore",
    )


class FlatPersonalInformation(_PIModel):
    """Earliest layout: two scalar fields."""

    name: str | None = None
    phone: str | None = None


class NameGroup(_PIModel):
    first_name: str | None = None
    last_name: str | None = None


class ContactGroup(_PIModel):
    email: str | None = None
    phone: str | None = None


class AddressGroup(_PIModel):
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip: str | None = None


class SocialGroup(_PIModel):
    facebook: str | None = None
    twitter: str | None = None
    instagram: str | None = None


class StructuredPersonalInformation(_PIModel):
    """Current layout: four optional groups of optional fields.

    Field declaration order is the hashing order, both for the groups and
    for the fields inside each group.
    """

    name: NameGroup | None = None
    contact: ContactGroup | None = None
    address: AddressGroup | None = None
    social: SocialGroup | None = None


PersonalInformation = Union[FlatPersonalInformation, StructuredPersonalInformation]
