"""
Crowdfunding Service Business Logic

Async facade over the crowdfunding ledger components. Every mutating call
runs as one ledger transaction against the store it is given: it reads,
validates, computes and commits without awaiting, then publishes events.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .business_registry import BusinessRegistry
from .campaign_ledger import CampaignLedger
from .donation_processor import DonationProcessor
from .events import CrowdfundingEventPublisher
from .ledger_store import ledger_transaction
from .models import (
    Ack,
    Business,
    CallContext,
    Campaign,
    CampaignStatus,
    CampaignType,
    CampaignView,
    Contribution,
    Donation,
    DonationReceipt,
    RewardClaim,
    RewardTier,
)
from .protocols import CrowdfundingServiceError, EventBusProtocol, KeyValueStoreProtocol
from .query_service import QueryService
from .reward_claim_engine import RewardClaimEngine

logger = logging.getLogger(__name__)


class CrowdfundingService:
    """
    Crowdfunding service core business logic.

    Holds no ledger state of its own: the store is an argument of every call.
    """

    def __init__(
        self,
        event_bus: Optional[EventBusProtocol] = None,
        list_limit: int = QueryService.DEFAULT_LIST_LIMIT,
    ):
        self.business_registry = BusinessRegistry()
        self.campaign_ledger = CampaignLedger()
        self.donation_processor = DonationProcessor(self.campaign_ledger)
        self.reward_claim_engine = RewardClaimEngine(
            self.campaign_ledger, self.donation_processor
        )
        self.query_service = QueryService(
            self.business_registry,
            self.campaign_ledger,
            self.donation_processor,
            self.reward_claim_engine,
            list_limit=list_limit,
        )
        self.event_bus = event_bus
        self.publisher = CrowdfundingEventPublisher(event_bus)

    def _execute(
        self,
        store: KeyValueStoreProtocol,
        ctx: CallContext,
        operation: str,
        func: Callable[..., Any],
    ) -> Tuple[Any, int]:
        """
        Run func(txn) as one all-or-nothing call.

        Returns the result and the effective time of the call. Ledger
        failures are logged and re-raised with the store untouched.
        """
        try:
            with ledger_transaction(store) as txn:
                now = txn.effective_time(ctx.current_time)
                result = func(txn)
                txn.advance_clock(now)
                return result, now
        except CrowdfundingServiceError as e:
            logger.warning(f"{operation} rejected for sender {ctx.sender}: [{e.error_code}] {e}")
            raise

    # ====================
    # Businesses
    # ====================

    async def register_business(
        self,
        store: KeyValueStoreProtocol,
        ctx: CallContext,
        name: str,
        description: str,
    ) -> Business:
        business, _ = self._execute(
            store,
            ctx,
            "register_business",
            lambda txn: self.business_registry.register_business(txn, ctx, name, description),
        )
        await self.publisher.publish_business_registered(business)
        return business

    # ====================
    # Campaigns
    # ====================

    async def create_campaign(
        self,
        store: KeyValueStoreProtocol,
        ctx: CallContext,
        title: str,
        description: str,
        target_amount: int,
        campaign_type: CampaignType = CampaignType.CHARITY,
        start_date: int = 0,
        end_date: int = 0,
        social_links: Optional[Sequence[str]] = None,
        reward_tiers: Optional[Sequence[RewardTier]] = None,
    ) -> Campaign:
        campaign, _ = self._execute(
            store,
            ctx,
            "create_campaign",
            lambda txn: self.campaign_ledger.create_campaign(
                txn,
                ctx,
                title=title,
                description=description,
                target_amount=target_amount,
                campaign_type=campaign_type,
                start_date=start_date,
                end_date=end_date,
                social_links=social_links,
                reward_tiers=reward_tiers,
            ),
        )
        await self.publisher.publish_campaign_created(campaign)
        return campaign

    async def update_progress(
        self,
        store: KeyValueStoreProtocol,
        ctx: CallContext,
        campaign_id: int,
        progress_report: str,
    ) -> Ack:
        def _update(txn):
            ack = self.campaign_ledger.update_progress(txn, ctx, campaign_id, progress_report)
            return ack, len(self.campaign_ledger.load_campaign(txn, campaign_id).progress_reports)

        (ack, report_count), now = self._execute(store, ctx, "update_progress", _update)
        await self.publisher.publish_progress_updated(campaign_id, report_count, now)
        return ack

    # ====================
    # Donations
    # ====================

    async def donate(
        self,
        store: KeyValueStoreProtocol,
        ctx: CallContext,
        campaign_id: int,
        amount: int,
        recurring: bool = False,
    ) -> DonationReceipt:
        def _donate(txn):
            receipt = self.donation_processor.donate(txn, ctx, campaign_id, amount, recurring)
            return receipt, self.campaign_ledger.load_campaign(txn, campaign_id).target_amount

        (receipt, target_amount), now = self._execute(store, ctx, "donate", _donate)
        await self.publisher.publish_donation(
            receipt,
            donor=ctx.sender,
            amount=amount,
            recurring=recurring,
            target_amount=target_amount,
            occurred_at=now,
        )
        return receipt

    # ====================
    # Rewards
    # ====================

    async def claim_reward(
        self,
        store: KeyValueStoreProtocol,
        ctx: CallContext,
        campaign_id: int,
        reward_id: int,
    ) -> Ack:
        ack, now = self._execute(
            store,
            ctx,
            "claim_reward",
            lambda txn: self.reward_claim_engine.claim_reward(txn, ctx, campaign_id, reward_id),
        )
        await self.publisher.publish_reward_claimed(campaign_id, reward_id, ctx.sender, now)
        return ack

    # ====================
    # Queries
    # ====================

    async def get_campaign(
        self, store: KeyValueStoreProtocol, campaign_id: int, current_time: int
    ) -> CampaignView:
        return self.query_service.get_campaign(store, campaign_id, current_time)

    async def list_campaigns(
        self,
        store: KeyValueStoreProtocol,
        current_time: int,
        status: Optional[CampaignStatus] = None,
        owner: Optional[str] = None,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[CampaignView], int]:
        return self.query_service.list_campaigns(
            store, current_time, status=status, owner=owner, limit=limit, offset=offset
        )

    async def get_business(self, store: KeyValueStoreProtocol, business_id: int) -> Business:
        return self.query_service.get_business(store, business_id)

    async def list_businesses(
        self, store: KeyValueStoreProtocol, owner: Optional[str] = None
    ) -> List[Business]:
        return self.query_service.list_businesses(store, owner)

    async def get_donation(self, store: KeyValueStoreProtocol, donation_id: int) -> Donation:
        return self.query_service.get_donation(store, donation_id)

    async def list_donations(
        self,
        store: KeyValueStoreProtocol,
        campaign_id: int,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> Tuple[List[Donation], int]:
        return self.query_service.list_donations(store, campaign_id, limit=limit, offset=offset)

    async def get_contribution(
        self, store: KeyValueStoreProtocol, campaign_id: int, donor: str
    ) -> Contribution:
        return self.query_service.get_contribution(store, campaign_id, donor)

    async def list_recurring_campaigns(
        self, store: KeyValueStoreProtocol, donor: str
    ) -> List[int]:
        return self.query_service.list_recurring_campaigns(store, donor)

    async def list_claims(
        self, store: KeyValueStoreProtocol, campaign_id: int, donor: str
    ) -> List[RewardClaim]:
        return self.query_service.list_claims(store, campaign_id, donor)

    async def list_claimable_rewards(
        self,
        store: KeyValueStoreProtocol,
        campaign_id: int,
        donor: str,
        current_time: int,
    ) -> List[RewardTier]:
        return self.query_service.list_claimable_rewards(store, campaign_id, donor, current_time)


__all__ = ["CrowdfundingService"]
