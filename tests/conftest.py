"""Shared test fixtures for ShareHash."""

import pytest

from sharehash_core.config.models import ShareHashConfig
from sharehash_core.share import Share


@pytest.fixture
def structured_share():
    return Share(
        "KEY1",
        {"name": {"firstName": "Ann"}, "contact": {"email": "a@x.com"}},
        schema_version="1.1.2",
    )


@pytest.fixture
def full_structured_share():
    return Share(
        "-----BEGIN PUBLIC KEY-----\nMFkwEwYHKoZIzj0CAQYIKoZIzj0DAQcDQgAE\n-----END PUBLIC KEY-----\n",
        {
            "name": {"firstName": "Ann", "lastName": "Lee"},
            "contact": {"email": "ann@example.com", "phone": "+1 555 0100"},
            "address": {"address": "1 Main St", "city": "Springfield", "state": "IL", "zip": "62701"},
            "social": {"facebook": "ann.lee", "twitter": "@annlee", "instagram": "annlee"},
        },
        kind="alias",
        tag="work",
    )


@pytest.fixture
def flat_share():
    return Share("KEY1\n", {"name": "Ann", "phone": ""}, schema_version="1.0")


@pytest.fixture
def sample_config():
    return ShareHashConfig()
