"""
Donation Processor

Validates and records donations, keeps raised totals and per-donor
contributions, and evaluates reward tiers against the donor's new total.
"""

import logging
from typing import List, Sequence, Tuple

from .campaign_ledger import CampaignLedger, derive_status
from .ledger_store import LedgerKeys, LedgerTransaction, checked_add
from .models import (
    MAX_AMOUNT,
    CallContext,
    CampaignStatus,
    Donation,
    DonationReceipt,
    RewardTier,
)
from .protocols import InvalidInputError, InvalidStateError

logger = logging.getLogger(__name__)


def evaluate_tiers(
    tiers: Sequence[RewardTier],
    previous_total: int,
    new_total: int,
) -> Tuple[List[int], List[int]]:
    """
    Return (eligible, newly_unlocked) tier ids for a contribution that moved
    from previous_total to new_total. Tier order is preserved.
    """
    eligible = [t.id for t in tiers if new_total >= t.threshold_amount]
    newly_unlocked = [
        t.id for t in tiers if previous_total < t.threshold_amount <= new_total
    ]
    return eligible, newly_unlocked


class DonationProcessor:
    """Records donations against campaigns"""

    def __init__(self, campaign_ledger: CampaignLedger):
        self.campaign_ledger = campaign_ledger

    def donate(
        self,
        txn: LedgerTransaction,
        ctx: CallContext,
        campaign_id: int,
        amount: int,
        recurring: bool = False,
    ) -> DonationReceipt:
        """
        Record a donation from the caller.

        Checks run in order: campaign exists, amount is positive, the new total
        is representable, the campaign is active. The overflow check comes
        before the status check so that a campaign already holding the
        maximum amount reports the overflow rather than its completion.

        Args:
            txn: Call-scoped ledger transaction
            ctx: Caller identity and call time
            campaign_id: Target campaign
            amount: Donation amount, 1..MAX_AMOUNT
            recurring: Stored as metadata for an external scheduler

        Returns:
            DonationReceipt with the new totals and the tiers the donor can claim
        """
        campaign = self.campaign_ledger.load_campaign(txn, campaign_id)

        if (
            not isinstance(amount, int)
            or isinstance(amount, bool)
            or amount <= 0
            or amount > MAX_AMOUNT
        ):
            raise InvalidInputError(
                f"Donation amount must be between 1 and {MAX_AMOUNT}", "amount"
            )

        now = txn.effective_time(ctx.current_time)
        new_raised = checked_add(campaign.raised_amount, amount)

        status = derive_status(campaign, now)
        if status != CampaignStatus.ACTIVE:
            raise InvalidStateError(
                f"Campaign {campaign_id} is {status.value} and no longer accepts donations",
                current_status=status,
            )

        previous_total = self.get_contribution(txn, campaign_id, ctx.sender)
        donor_total = checked_add(previous_total, amount)

        sequence = campaign.donation_count + 1
        donation = Donation(
            donation_id=txn.next_id("donation"),
            campaign_id=campaign_id,
            sequence=sequence,
            donor=ctx.sender,
            amount=amount,
            recurring=recurring,
            timestamp=now,
        )
        txn.put(LedgerKeys.donation(campaign_id, sequence), donation.model_dump(mode="json"))
        txn.put(LedgerKeys.donation_ref(donation.donation_id), [campaign_id, sequence])

        campaign.raised_amount = new_raised
        campaign.donation_count = sequence
        self.campaign_ledger.save_campaign(txn, campaign)

        txn.put(LedgerKeys.contribution(campaign_id, ctx.sender), donor_total)
        if recurring:
            self._track_recurring(txn, ctx.sender, campaign_id)

        eligible, newly_unlocked = evaluate_tiers(
            campaign.reward_tiers, previous_total, donor_total
        )
        new_status = derive_status(campaign, now)

        logger.info(
            f"Donation {donation.donation_id} of {amount} to campaign {campaign_id} "
            f"by {ctx.sender}: raised={new_raised}, status={new_status.value}"
        )
        return DonationReceipt(
            donation_id=donation.donation_id,
            campaign_id=campaign_id,
            new_raised_amount=new_raised,
            status=new_status,
            donor_total=donor_total,
            eligible_reward_ids=eligible,
            newly_unlocked_reward_ids=newly_unlocked,
        )

    def get_contribution(self, txn: LedgerTransaction, campaign_id: int, donor: str) -> int:
        """Cumulative amount donor has given to campaign"""
        return txn.get(LedgerKeys.contribution(campaign_id, donor), 0)

    @staticmethod
    def _track_recurring(txn: LedgerTransaction, donor: str, campaign_id: int) -> None:
        campaign_ids = txn.get(LedgerKeys.recurring(donor), [])
        if campaign_id not in campaign_ids:
            campaign_ids.append(campaign_id)
            txn.put(LedgerKeys.recurring(donor), sorted(campaign_ids))


__all__ = ["DonationProcessor", "evaluate_tiers"]
