"""
Reward Claim Engine

Explicit, single-use reward claims against a campaign's tiers.
"""

import logging
from typing import List

from .campaign_ledger import CampaignLedger, derive_status
from .donation_processor import DonationProcessor
from .ledger_store import LedgerKeys, LedgerTransaction
from .models import Ack, CallContext, CampaignStatus, RewardClaim, RewardTier
from .protocols import (
    AlreadyClaimedError,
    IneligibleError,
    InvalidStateError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


class RewardClaimEngine:
    """Validates and records (tier, donor) claims"""

    def __init__(self, campaign_ledger: CampaignLedger, donation_processor: DonationProcessor):
        self.campaign_ledger = campaign_ledger
        self.donation_processor = donation_processor

    def claim_reward(
        self,
        txn: LedgerTransaction,
        ctx: CallContext,
        campaign_id: int,
        reward_id: int,
    ) -> Ack:
        """Claim a reward tier for the caller. A repeated claim always fails."""
        campaign = self.campaign_ledger.load_campaign(txn, campaign_id)
        tier = campaign.find_tier(reward_id)
        if tier is None:
            raise NotFoundError(
                f"Reward {reward_id} not found in campaign {campaign_id}", "reward"
            )

        # Completed campaigns stay claimable; only expiry closes rewards
        status = derive_status(campaign, txn.effective_time(ctx.current_time))
        if status == CampaignStatus.EXPIRED:
            raise InvalidStateError(
                f"Campaign {campaign_id} expired before reaching its target",
                current_status=status,
            )

        contributed = self.donation_processor.get_contribution(txn, campaign_id, ctx.sender)
        if contributed < tier.threshold_amount:
            raise IneligibleError(
                f"Reward {reward_id} requires {tier.threshold_amount}, donor has given {contributed}",
                required=tier.threshold_amount,
                contributed=contributed,
            )

        key = LedgerKeys.claim(campaign_id, reward_id, ctx.sender)
        if key in txn:
            raise AlreadyClaimedError(
                f"Reward {reward_id} of campaign {campaign_id} already claimed by {ctx.sender}"
            )

        claim = RewardClaim(
            campaign_id=campaign_id,
            reward_id=reward_id,
            donor=ctx.sender,
            claimed_at=txn.effective_time(ctx.current_time),
        )
        txn.put(key, claim.model_dump(mode="json"))

        logger.info(f"Reward {reward_id} of campaign {campaign_id} claimed by {ctx.sender}")
        return Ack(message="Reward claimed")

    def is_claimed(self, txn: LedgerTransaction, campaign_id: int, reward_id: int, donor: str) -> bool:
        return LedgerKeys.claim(campaign_id, reward_id, donor) in txn

    def list_claimable(
        self,
        txn: LedgerTransaction,
        campaign_id: int,
        donor: str,
        now: int,
    ) -> List[RewardTier]:
        """Tiers donor is eligible for and has not claimed yet"""
        campaign = self.campaign_ledger.load_campaign(txn, campaign_id)
        if derive_status(campaign, now) == CampaignStatus.EXPIRED:
            return []
        contributed = self.donation_processor.get_contribution(txn, campaign_id, donor)
        return [
            tier
            for tier in campaign.reward_tiers
            if contributed >= tier.threshold_amount
            and not self.is_claimed(txn, campaign_id, tier.id, donor)
        ]


__all__ = ["RewardClaimEngine"]
