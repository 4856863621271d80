"""
Component Test Fixtures for Crowdfunding Service

Provides the service facade over an in-memory store with a mock event bus,
and a FastAPI TestClient bound to the same store and service.
"""

import pytest
from unittest.mock import patch

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from core.config import CrowdfundingConfig
from microservices.crowdfunding_service.factory import (
    create_crowdfunding_service,
    create_ledger_store,
)
from tests.contracts.crowdfunding.data_contract import (
    BASE_TIME,
    CrowdfundingTestDataFactory,
)


@pytest.fixture
def factory():
    """Provide test data factory"""
    return CrowdfundingTestDataFactory()


@pytest.fixture
def store():
    return create_ledger_store()


@pytest.fixture
def service(mock_event_bus):
    """CrowdfundingService publishing to the mock event bus"""
    config = CrowdfundingConfig(events_enabled=True)
    return create_crowdfunding_service(config=config, event_bus=mock_event_bus)


@pytest.fixture
def owner(factory):
    return factory.make_sender("owner")


@pytest.fixture
def donor(factory):
    return factory.make_sender("donor")


@pytest.fixture
def owner_ctx(factory, owner):
    return factory.make_context(owner, BASE_TIME)


@pytest.fixture
def donor_ctx(factory, donor):
    return factory.make_context(donor, BASE_TIME)


@pytest.fixture
def client(service, store):
    """Create test client bound to the fixture service and store"""
    from fastapi.testclient import TestClient
    from microservices.crowdfunding_service import main

    with TestClient(main.app, raise_server_exceptions=False) as test_client:
        # Startup builds its own store and service; swap in the fixtures afterwards
        with patch.object(main, "crowdfunding_service", service), \
             patch.object(main, "ledger_store", store):
            yield test_client
