"""
Unit Test Fixtures for Crowdfunding Service

Provides the ledger components wired over a fresh in-memory store.
Uses CrowdfundingTestDataFactory from the data contract.
"""

import pytest

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from microservices.crowdfunding_service.business_registry import BusinessRegistry
from microservices.crowdfunding_service.campaign_ledger import CampaignLedger
from microservices.crowdfunding_service.donation_processor import DonationProcessor
from microservices.crowdfunding_service.ledger_store import (
    InMemoryKeyValueStore,
    LedgerTransaction,
)
from microservices.crowdfunding_service.query_service import QueryService
from microservices.crowdfunding_service.reward_claim_engine import RewardClaimEngine
from tests.contracts.crowdfunding.data_contract import (
    BASE_TIME,
    CrowdfundingTestDataFactory,
)


# ====================
# Fixtures
# ====================

@pytest.fixture
def factory():
    """Provide test data factory"""
    return CrowdfundingTestDataFactory()


@pytest.fixture
def store():
    """Fresh ledger store"""
    return InMemoryKeyValueStore()


@pytest.fixture
def txn(store):
    """Transaction over the fresh store, committed by the test when needed"""
    return LedgerTransaction(store)


@pytest.fixture
def campaign_ledger():
    return CampaignLedger()


@pytest.fixture
def business_registry():
    return BusinessRegistry()


@pytest.fixture
def donation_processor(campaign_ledger):
    return DonationProcessor(campaign_ledger)


@pytest.fixture
def reward_claim_engine(campaign_ledger, donation_processor):
    return RewardClaimEngine(campaign_ledger, donation_processor)


@pytest.fixture
def query_service(business_registry, campaign_ledger, donation_processor, reward_claim_engine):
    return QueryService(
        business_registry, campaign_ledger, donation_processor, reward_claim_engine
    )


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
def campaign(txn, campaign_ledger, owner_ctx, factory):
    """Active campaign: target 1000, tiers 100/500/1000, no deadline"""
    return campaign_ledger.create_campaign(txn, owner_ctx, **factory.make_campaign_kwargs())


@pytest.fixture
def deadline_campaign(txn, campaign_ledger, owner_ctx, factory):
    """Active campaign ending one hour after BASE_TIME"""
    return campaign_ledger.create_campaign(
        txn,
        owner_ctx,
        **factory.make_campaign_kwargs(start_date=BASE_TIME, end_date=BASE_TIME + 3600),
    )
