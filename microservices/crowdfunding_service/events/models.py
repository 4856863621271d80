"""
Crowdfunding Event Data Models

Event type definitions and payloads for crowdfunding service events.
"""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class CrowdfundingEventType(str, Enum):
    """
    Events published by crowdfunding_service after a ledger commit.

    Other services should reference these when subscribing.
    """
    BUSINESS_REGISTERED = "crowdfunding.business.registered"
    CAMPAIGN_CREATED = "crowdfunding.campaign.created"
    CAMPAIGN_COMPLETED = "crowdfunding.campaign.completed"
    PROGRESS_UPDATED = "crowdfunding.campaign.progress_updated"
    DONATION_RECORDED = "crowdfunding.donation.recorded"
    REWARD_UNLOCKED = "crowdfunding.reward.unlocked"
    REWARD_CLAIMED = "crowdfunding.reward.claimed"


class BusinessRegisteredEventData(BaseModel):
    business_id: int
    owner: str
    name: str


class CampaignCreatedEventData(BaseModel):
    campaign_id: int
    owner: str
    title: str
    target_amount: int
    campaign_type: str
    end_date: int = 0
    reward_tier_ids: List[int] = Field(default_factory=list)


class CampaignCompletedEventData(BaseModel):
    campaign_id: int
    raised_amount: int
    target_amount: int


class ProgressUpdatedEventData(BaseModel):
    campaign_id: int
    report_count: int


class DonationRecordedEventData(BaseModel):
    """Recurring donations carry the flag for an external scheduler"""
    donation_id: int
    campaign_id: int
    donor: str
    amount: int
    recurring: bool
    new_raised_amount: int
    status: str


class RewardUnlockedEventData(BaseModel):
    campaign_id: int
    reward_id: int
    donor: str
    donor_total: int


class RewardClaimedEventData(BaseModel):
    campaign_id: int
    reward_id: int
    donor: str


__all__ = [
    "CrowdfundingEventType",
    "BusinessRegisteredEventData",
    "CampaignCreatedEventData",
    "CampaignCompletedEventData",
    "ProgressUpdatedEventData",
    "DonationRecordedEventData",
    "RewardUnlockedEventData",
    "RewardClaimedEventData",
]
