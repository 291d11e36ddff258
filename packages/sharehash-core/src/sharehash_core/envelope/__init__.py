"""Envelope serialization for shares."""

from sharehash_core.envelope.codec import EnvelopeModel, deserialize, from_dict, serialize, to_dict

__all__ = [
    "EnvelopeModel",
    "deserialize",
    "from_dict",
    "serialize",
    "to_dict",
]
