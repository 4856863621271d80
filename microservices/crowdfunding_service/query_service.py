"""
Query Service

Read-only projections over the ledger. Every query reads the store it is
given directly; nothing is cached and nothing is ever committed.
"""

import logging
from typing import List, Optional, Tuple

from .business_registry import BusinessRegistry
from .campaign_ledger import CampaignLedger
from .donation_processor import DonationProcessor
from .ledger_store import LedgerKeys, LedgerTransaction
from .models import (
    Business,
    CampaignStatus,
    CampaignView,
    Contribution,
    Donation,
    RewardClaim,
    RewardTier,
)
from .protocols import KeyValueStoreProtocol, NotFoundError
from .reward_claim_engine import RewardClaimEngine

logger = logging.getLogger(__name__)


class QueryService:
    """Read-side of the crowdfunding ledger"""

    DEFAULT_LIST_LIMIT = 100

    def __init__(
        self,
        business_registry: BusinessRegistry,
        campaign_ledger: CampaignLedger,
        donation_processor: DonationProcessor,
        reward_claim_engine: RewardClaimEngine,
        list_limit: int = DEFAULT_LIST_LIMIT,
    ):
        self.business_registry = business_registry
        self.campaign_ledger = campaign_ledger
        self.donation_processor = donation_processor
        self.reward_claim_engine = reward_claim_engine
        self.list_limit = list_limit

    @staticmethod
    def _reader(store: KeyValueStoreProtocol) -> LedgerTransaction:
        # Reads go through a transaction that is never committed
        return LedgerTransaction(store)

    # ====================
    # Campaigns
    # ====================

    def get_campaign(
        self, store: KeyValueStoreProtocol, campaign_id: int, current_time: int
    ) -> CampaignView:
        txn = self._reader(store)
        return self.campaign_ledger.get_campaign(
            txn, campaign_id, txn.effective_time(current_time)
        )

    def list_campaigns(
        self,
        store: KeyValueStoreProtocol,
        current_time: int,
        status: Optional[CampaignStatus] = None,
        owner: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[CampaignView], int]:
        """Campaigns in id order, filtered on live status and owner"""
        txn = self._reader(store)
        now = txn.effective_time(current_time)
        last_id = txn.get(LedgerKeys.counter("campaign"), 0)

        views = []
        for campaign_id in range(1, last_id + 1):
            campaign = self.campaign_ledger.find_campaign(txn, campaign_id)
            if campaign is None:
                continue
            if owner is not None and campaign.owner != owner:
                continue
            view = self.campaign_ledger.view(campaign, now)
            if status is not None and view.status != status:
                continue
            views.append(view)

        return self._page(views, limit, offset)

    # ====================
    # Businesses
    # ====================

    def get_business(self, store: KeyValueStoreProtocol, business_id: int) -> Business:
        return self.business_registry.get_business(self._reader(store), business_id)

    def list_businesses(
        self, store: KeyValueStoreProtocol, owner: Optional[str] = None
    ) -> List[Business]:
        txn = self._reader(store)
        last_id = txn.get(LedgerKeys.counter("business"), 0)
        businesses = []
        for business_id in range(1, last_id + 1):
            business = self.business_registry.find_business(txn, business_id)
            if business is not None and (owner is None or business.owner == owner):
                businesses.append(business)
        return businesses

    # ====================
    # Donations
    # ====================

    def get_donation(self, store: KeyValueStoreProtocol, donation_id: int) -> Donation:
        txn = self._reader(store)
        ref = txn.get(LedgerKeys.donation_ref(donation_id))
        if ref is None:
            raise NotFoundError(f"Donation {donation_id} not found", "donation")
        campaign_id, sequence = ref
        return Donation.model_validate(txn.get(LedgerKeys.donation(campaign_id, sequence)))

    def list_donations(
        self,
        store: KeyValueStoreProtocol,
        campaign_id: int,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[Donation], int]:
        """Donations of a campaign in arrival order"""
        txn = self._reader(store)
        campaign = self.campaign_ledger.load_campaign(txn, campaign_id)
        donations = [
            Donation.model_validate(txn.get(LedgerKeys.donation(campaign_id, sequence)))
            for sequence in range(1, campaign.donation_count + 1)
        ]
        return self._page(donations, limit, offset)

    def get_contribution(
        self, store: KeyValueStoreProtocol, campaign_id: int, donor: str
    ) -> Contribution:
        txn = self._reader(store)
        self.campaign_ledger.load_campaign(txn, campaign_id)
        return Contribution(
            campaign_id=campaign_id,
            donor=donor,
            amount=self.donation_processor.get_contribution(txn, campaign_id, donor),
        )

    def list_recurring_campaigns(self, store: KeyValueStoreProtocol, donor: str) -> List[int]:
        """Campaign ids donor has made recurring donations to"""
        return self._reader(store).get(LedgerKeys.recurring(donor), [])

    # ====================
    # Rewards
    # ====================

    def list_claims(
        self, store: KeyValueStoreProtocol, campaign_id: int, donor: str
    ) -> List[RewardClaim]:
        txn = self._reader(store)
        campaign = self.campaign_ledger.load_campaign(txn, campaign_id)
        claims = []
        for tier in campaign.reward_tiers:
            data = txn.get(LedgerKeys.claim(campaign_id, tier.id, donor))
            if data is not None:
                claims.append(RewardClaim.model_validate(data))
        return claims

    def list_claimable_rewards(
        self,
        store: KeyValueStoreProtocol,
        campaign_id: int,
        donor: str,
        current_time: int,
    ) -> List[RewardTier]:
        txn = self._reader(store)
        return self.reward_claim_engine.list_claimable(
            txn, campaign_id, donor, txn.effective_time(current_time)
        )

    def _page(self, items: list, limit: Optional[int], offset: int) -> Tuple[list, int]:
        limit = self.list_limit if limit is None else limit
        return items[offset : offset + limit], len(items)


__all__ = ["QueryService"]
