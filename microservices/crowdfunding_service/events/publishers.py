"""
Crowdfunding Event Publishers

Publishes committed ledger changes to the event bus. Publishing is best
effort: a failure is logged and never undoes or fails the ledger call.
"""

import logging
from typing import Any, Dict, List

from ..models import Business, Campaign, CampaignStatus, DonationReceipt
from .models import (
    BusinessRegisteredEventData,
    CampaignCompletedEventData,
    CampaignCreatedEventData,
    CrowdfundingEventType,
    DonationRecordedEventData,
    ProgressUpdatedEventData,
    RewardClaimedEventData,
    RewardUnlockedEventData,
)

logger = logging.getLogger(__name__)


class CrowdfundingEventPublisher:
    """Publisher for crowdfunding service events"""

    def __init__(self, event_bus=None):
        self.event_bus = event_bus
        self.source = "crowdfunding_service"

    async def publish(
        self,
        event_type: CrowdfundingEventType,
        data: Dict[str, Any],
        occurred_at: int,
    ) -> bool:
        """
        Publish an event.

        Args:
            event_type: The event type enum
            data: Event data payload
            occurred_at: Effective ledger time of the call that produced it

        Returns:
            True if published successfully, False otherwise
        """
        if not self.event_bus:
            logger.debug(f"Event bus not configured, skipping publish: {event_type.value}")
            return False

        try:
            event = {
                "event_type": event_type.value,
                "source": self.source,
                "occurred_at": occurred_at,
                "data": data,
            }
            await self.event_bus.publish(event_type.value, event)
            logger.debug(f"Published event: {event_type.value}")
            return True

        except Exception as e:
            logger.warning(f"Failed to publish event {event_type.value}: {e}")
            return False

    async def publish_business_registered(self, business: Business) -> bool:
        data = BusinessRegisteredEventData(
            business_id=business.business_id,
            owner=business.owner,
            name=business.name,
        )
        return await self.publish(
            CrowdfundingEventType.BUSINESS_REGISTERED, data.model_dump(), business.created_at
        )

    async def publish_campaign_created(self, campaign: Campaign) -> bool:
        data = CampaignCreatedEventData(
            campaign_id=campaign.campaign_id,
            owner=campaign.owner,
            title=campaign.title,
            target_amount=campaign.target_amount,
            campaign_type=campaign.campaign_type.value,
            end_date=campaign.end_date,
            reward_tier_ids=[t.id for t in campaign.reward_tiers],
        )
        return await self.publish(
            CrowdfundingEventType.CAMPAIGN_CREATED, data.model_dump(), campaign.created_at
        )

    async def publish_progress_updated(
        self, campaign_id: int, report_count: int, occurred_at: int
    ) -> bool:
        data = ProgressUpdatedEventData(campaign_id=campaign_id, report_count=report_count)
        return await self.publish(
            CrowdfundingEventType.PROGRESS_UPDATED, data.model_dump(), occurred_at
        )

    async def publish_donation(
        self,
        receipt: DonationReceipt,
        donor: str,
        amount: int,
        recurring: bool,
        target_amount: int,
        occurred_at: int,
    ) -> List[bool]:
        """
        Publish donation.recorded, one reward.unlocked per newly reachable
        tier, and campaign.completed when this donation reached the target.
        """
        results = []
        recorded = DonationRecordedEventData(
            donation_id=receipt.donation_id,
            campaign_id=receipt.campaign_id,
            donor=donor,
            amount=amount,
            recurring=recurring,
            new_raised_amount=receipt.new_raised_amount,
            status=receipt.status.value,
        )
        results.append(
            await self.publish(
                CrowdfundingEventType.DONATION_RECORDED, recorded.model_dump(), occurred_at
            )
        )

        for reward_id in receipt.newly_unlocked_reward_ids:
            unlocked = RewardUnlockedEventData(
                campaign_id=receipt.campaign_id,
                reward_id=reward_id,
                donor=donor,
                donor_total=receipt.donor_total,
            )
            results.append(
                await self.publish(
                    CrowdfundingEventType.REWARD_UNLOCKED, unlocked.model_dump(), occurred_at
                )
            )

        # Donations are only accepted while active, so completed here means this one crossed the target
        if receipt.status == CampaignStatus.COMPLETED:
            completed = CampaignCompletedEventData(
                campaign_id=receipt.campaign_id,
                raised_amount=receipt.new_raised_amount,
                target_amount=target_amount,
            )
            results.append(
                await self.publish(
                    CrowdfundingEventType.CAMPAIGN_COMPLETED, completed.model_dump(), occurred_at
                )
            )
        return results

    async def publish_reward_claimed(
        self, campaign_id: int, reward_id: int, donor: str, occurred_at: int
    ) -> bool:
        data = RewardClaimedEventData(campaign_id=campaign_id, reward_id=reward_id, donor=donor)
        return await self.publish(
            CrowdfundingEventType.REWARD_CLAIMED, data.model_dump(), occurred_at
        )


__all__ = ["CrowdfundingEventPublisher"]
