"""
Crowdfunding Service Events

Event types, payloads and publisher for crowdfunding service.
"""

from .models import (
    CrowdfundingEventType,
    BusinessRegisteredEventData,
    CampaignCreatedEventData,
    CampaignCompletedEventData,
    ProgressUpdatedEventData,
    DonationRecordedEventData,
    RewardUnlockedEventData,
    RewardClaimedEventData,
)
from .publishers import CrowdfundingEventPublisher

__all__ = [
    # Event Types
    "CrowdfundingEventType",
    # Event Data Models
    "BusinessRegisteredEventData",
    "CampaignCreatedEventData",
    "CampaignCompletedEventData",
    "ProgressUpdatedEventData",
    "DonationRecordedEventData",
    "RewardUnlockedEventData",
    "RewardClaimedEventData",
    # Publisher
    "CrowdfundingEventPublisher",
]
