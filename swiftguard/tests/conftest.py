"""
SwiftGuard - Pytest Configuration and Fixtures

This module provides shared fixtures for all tests.
"""

import pytest

from swiftguard.core.config import Config, Environment
from swiftguard.service.validation_service import ValidationService
from swiftguard.validators.dedup_ledger import InMemoryDedupLedger


VALID_MT103 = """:20:REF123456
:23B:CRED
:32A:240101USD1000,
:50K:John Smith
12 High Street, London
:59:Jane Doe
45 Market Road, Dublin
:71A:OUR"""


def make_message(reference: str = "REF123456", **overrides) -> str:
    """Build an MT103 message, replacing or dropping (value None) tag values."""
    fields = {
        ":20:": reference,
        ":23B:": "CRED",
        ":32A:": "240101USD1000,",
        ":50K:": "John Smith\n12 High Street, London",
        ":59:": "Jane Doe\n45 Market Road, Dublin",
        ":71A:": "OUR",
    }
    for tag, value in overrides.items():
        fields[f":{tag.lstrip('F')}:"] = value

    return "\n".join(f"{tag}{value}" for tag, value in fields.items() if value is not None)


@pytest.fixture
def valid_message():
    """Structurally valid, clean MT103 message."""
    return VALID_MT103


@pytest.fixture
def message_factory():
    """Builder for MT103 variants, e.g. message_factory("REF2", F23B=None)."""
    return make_message


@pytest.fixture
def test_config():
    """Create test configuration."""
    config = Config()
    config.environment = Environment.TESTING
    return config


@pytest.fixture
def ledger():
    """Fresh in-memory dedup ledger."""
    return InMemoryDedupLedger()


@pytest.fixture
def service(test_config, ledger):
    """Validation service with an isolated ledger."""
    return ValidationService(config=test_config, ledger=ledger)
