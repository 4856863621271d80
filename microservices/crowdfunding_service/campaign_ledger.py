"""
Campaign Ledger

Campaign records, status derivation and progress reports.

Status is never stored. It is derived on every read and write from the
stored amounts and dates and the effective call time:

    raised >= target                  -> completed
    end_date != 0 and now > end_date  -> expired
    otherwise                         -> active
"""

import logging
from typing import List, Optional, Sequence

from .ledger_store import LedgerKeys, LedgerTransaction
from .models import (
    MAX_AMOUNT,
    Ack,
    CallContext,
    Campaign,
    CampaignStatus,
    CampaignType,
    CampaignView,
    RewardTier,
)
from .protocols import InvalidInputError, NotFoundError, UnauthorizedError

logger = logging.getLogger(__name__)


def derive_status(campaign: Campaign, now: int) -> CampaignStatus:
    """Derive the live status of a campaign at time now"""
    if campaign.raised_amount >= campaign.target_amount:
        return CampaignStatus.COMPLETED
    if campaign.end_date != 0 and now > campaign.end_date:
        return CampaignStatus.EXPIRED
    return CampaignStatus.ACTIVE


class CampaignLedger:
    """Campaign records keyed by sequential id"""

    # ====================
    # Record access
    # ====================

    def find_campaign(self, txn: LedgerTransaction, campaign_id: int) -> Optional[Campaign]:
        data = txn.get(LedgerKeys.campaign(campaign_id))
        return Campaign.model_validate(data) if data is not None else None

    def load_campaign(self, txn: LedgerTransaction, campaign_id: int) -> Campaign:
        campaign = self.find_campaign(txn, campaign_id)
        if campaign is None:
            raise NotFoundError(f"Campaign {campaign_id} not found", "campaign")
        return campaign

    def save_campaign(self, txn: LedgerTransaction, campaign: Campaign) -> None:
        txn.put(LedgerKeys.campaign(campaign.campaign_id), campaign.model_dump(mode="json"))

    def view(self, campaign: Campaign, now: int) -> CampaignView:
        return CampaignView(
            **campaign.model_dump(),
            status=derive_status(campaign, now),
            evaluated_at=now,
        )

    # ====================
    # Operations
    # ====================

    def create_campaign(
        self,
        txn: LedgerTransaction,
        ctx: CallContext,
        title: str,
        description: str,
        target_amount: int,
        campaign_type: CampaignType,
        start_date: int = 0,
        end_date: int = 0,
        social_links: Optional[Sequence[str]] = None,
        reward_tiers: Optional[Sequence[RewardTier]] = None,
    ) -> Campaign:
        """Open a new campaign owned by the caller, in active status"""
        # pydantic's ValidationError is a ValueError
        try:
            tiers = [RewardTier.model_validate(t) for t in (reward_tiers or [])]
            campaign_type = CampaignType(campaign_type)
        except ValueError as e:
            raise InvalidInputError(f"Invalid campaign definition: {e}") from e
        self._validate_campaign(title, target_amount, start_date, end_date, tiers)

        try:
            campaign = Campaign(
                campaign_id=txn.next_id("campaign"),
                owner=ctx.sender,
                title=title,
                description=description or "",
                target_amount=target_amount,
                raised_amount=0,
                campaign_type=campaign_type,
                start_date=start_date,
                end_date=end_date,
                social_links=list(social_links or []),
                reward_tiers=tiers,
                progress_reports=[],
                created_at=txn.effective_time(ctx.current_time),
            )
        except ValueError as e:
            raise InvalidInputError(f"Invalid campaign definition: {e}") from e
        self.save_campaign(txn, campaign)

        logger.info(
            f"Created campaign {campaign.campaign_id} for owner {ctx.sender}: "
            f"target={target_amount}, tiers={len(tiers)}"
        )
        return campaign

    def update_progress(
        self,
        txn: LedgerTransaction,
        ctx: CallContext,
        campaign_id: int,
        report: str,
    ) -> Ack:
        """Append a progress report. Owner only, allowed in every status."""
        campaign = self.load_campaign(txn, campaign_id)
        if ctx.sender != campaign.owner:
            raise UnauthorizedError(
                f"Only the owner of campaign {campaign_id} can update its progress"
            )

        campaign.progress_reports.append(report)
        self.save_campaign(txn, campaign)

        logger.info(
            f"Campaign {campaign_id} progress report #{len(campaign.progress_reports)} recorded"
        )
        return Ack(message="Progress report recorded")

    def get_campaign(self, txn: LedgerTransaction, campaign_id: int, now: int) -> CampaignView:
        return self.view(self.load_campaign(txn, campaign_id), now)

    # ====================
    # Validation
    # ====================

    def _validate_campaign(
        self,
        title: str,
        target_amount: int,
        start_date: int,
        end_date: int,
        tiers: List[RewardTier],
    ) -> None:
        if not title or not title.strip():
            raise InvalidInputError("Campaign title is required", "title")
        if target_amount <= 0 or target_amount > MAX_AMOUNT:
            raise InvalidInputError(
                f"Target amount must be between 1 and {MAX_AMOUNT}", "target_amount"
            )
        if start_date < 0 or end_date < 0:
            raise InvalidInputError("Dates must not be negative", "start_date")
        if end_date != 0 and end_date <= start_date:
            raise InvalidInputError("End date must be after start date", "end_date")
        self._validate_tiers(tiers)

    @staticmethod
    def _validate_tiers(tiers: List[RewardTier]) -> None:
        seen = set()
        for tier in tiers:
            if tier.id in seen:
                raise InvalidInputError(f"Duplicate reward tier id {tier.id}", "reward_tiers")
            seen.add(tier.id)
            if tier.threshold_amount <= 0:
                raise InvalidInputError(
                    f"Reward tier {tier.id} threshold must be greater than zero",
                    "reward_tiers",
                )


__all__ = ["CampaignLedger", "derive_status"]
