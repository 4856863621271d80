"""
Crowdfunding Service Data Models

Pydantic models for businesses, campaigns, reward tiers, donations and claims,
plus the request/response shapes of the external call surface.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field


# Amounts are unsigned 64-bit integers
MAX_AMOUNT = 2**64 - 1


# ====================
# Enum Types
# ====================

class CampaignType(str, Enum):
    """Campaign type"""
    BUSINESS = "business"
    CHARITY = "charity"


class CampaignStatus(str, Enum):
    """Derived campaign status"""
    ACTIVE = "active"
    COMPLETED = "completed"
    EXPIRED = "expired"


# ====================
# Call Context
# ====================

class CallContext(BaseModel):
    """Authenticated sender and caller-supplied time of one external call"""
    sender: str = Field(..., min_length=1, description="Opaque authenticated sender id")
    current_time: int = Field(..., ge=0, description="Call time in seconds")


# ====================
# Core Data Models
# ====================

class Business(BaseModel):
    """Registered business"""
    business_id: int = Field(..., ge=1)
    owner: str
    name: str
    description: str
    created_at: int = Field(default=0, ge=0)


class RewardTier(BaseModel):
    """Contribution threshold that unlocks a reward"""
    id: int = Field(..., ge=0)
    threshold_amount: int = Field(..., ge=0, le=MAX_AMOUNT)
    description: str = ""
    title: Optional[str] = None


class Campaign(BaseModel):
    """Stored campaign record. Status is never persisted."""
    campaign_id: int = Field(..., ge=1)
    owner: str
    title: str
    description: str = ""
    target_amount: int = Field(..., ge=1, le=MAX_AMOUNT)
    raised_amount: int = Field(default=0, ge=0, le=MAX_AMOUNT)
    campaign_type: CampaignType
    start_date: int = Field(default=0, ge=0)
    end_date: int = Field(default=0, ge=0)
    social_links: List[str] = Field(default_factory=list)
    reward_tiers: List[RewardTier] = Field(default_factory=list)
    progress_reports: List[str] = Field(default_factory=list)
    donation_count: int = Field(default=0, ge=0)
    created_at: int = Field(default=0, ge=0)

    def find_tier(self, reward_id: int) -> Optional[RewardTier]:
        for tier in self.reward_tiers:
            if tier.id == reward_id:
                return tier
        return None


class Donation(BaseModel):
    """Immutable donation record"""
    donation_id: int = Field(..., ge=1)
    campaign_id: int = Field(..., ge=1)
    sequence: int = Field(..., ge=1, description="Position within the campaign")
    donor: str
    amount: int = Field(..., ge=1, le=MAX_AMOUNT)
    recurring: bool = False
    timestamp: int = Field(default=0, ge=0)


class RewardClaim(BaseModel):
    """Recorded (tier, donor) claim"""
    campaign_id: int
    reward_id: int
    donor: str
    claimed_at: int = 0


# ====================
# Views and Results
# ====================

class CampaignView(Campaign):
    """Campaign projection with live status"""
    status: CampaignStatus
    evaluated_at: int = Field(..., ge=0, description="Effective time used to derive status")


class DonationReceipt(BaseModel):
    """Result of a successful donation"""
    donation_id: int
    campaign_id: int
    new_raised_amount: int
    status: CampaignStatus
    donor_total: int
    eligible_reward_ids: List[int] = Field(default_factory=list)
    newly_unlocked_reward_ids: List[int] = Field(default_factory=list)


class Contribution(BaseModel):
    """Cumulative contribution of one donor to one campaign"""
    campaign_id: int
    donor: str
    amount: int = 0


class Ack(BaseModel):
    """Acknowledgement of a state change"""
    success: bool = True
    message: str = "ok"


# ====================
# Request Models
# ====================

class RegisterBusinessRequest(BaseModel):
    """Register a business"""
    name: str
    description: str


class CreateCampaignRequest(BaseModel):
    """Open a fundraising campaign"""
    title: str
    description: str = ""
    target_amount: int = Field(..., ge=0, le=MAX_AMOUNT)
    campaign_type: CampaignType = CampaignType.CHARITY
    start_date: int = Field(default=0, ge=0)
    end_date: int = Field(default=0, ge=0)
    social_links: List[str] = Field(default_factory=list)
    reward_tiers: List[RewardTier] = Field(default_factory=list)


class DonateRequest(BaseModel):
    """Donate to a campaign"""
    amount: int = Field(..., ge=0, le=MAX_AMOUNT)
    recurring: bool = False


class UpdateProgressRequest(BaseModel):
    """Append a progress report"""
    progress_report: str


# ====================
# Response Models
# ====================

class BusinessCreatedResponse(BaseModel):
    business_id: int


class CampaignCreatedResponse(BaseModel):
    campaign_id: int


class CampaignListResponse(BaseModel):
    campaigns: List[CampaignView] = Field(default_factory=list)
    total: int = 0


class DonationListResponse(BaseModel):
    donations: List[Donation] = Field(default_factory=list)
    total: int = 0


class RewardListResponse(BaseModel):
    rewards: List[RewardTier] = Field(default_factory=list)


class RecurringCampaignsResponse(BaseModel):
    donor: str
    campaign_ids: List[int] = Field(default_factory=list)


class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    service: str
    port: int
    version: str


class ErrorResponse(BaseModel):
    """Standard error response"""
    detail: str
    error_code: Optional[str] = None


__all__ = [
    "MAX_AMOUNT",
    "CampaignType",
    "CampaignStatus",
    "CallContext",
    "Business",
    "RewardTier",
    "Campaign",
    "Donation",
    "RewardClaim",
    "CampaignView",
    "DonationReceipt",
    "Contribution",
    "Ack",
    "RegisterBusinessRequest",
    "CreateCampaignRequest",
    "DonateRequest",
    "UpdateProgressRequest",
    "BusinessCreatedResponse",
    "CampaignCreatedResponse",
    "CampaignListResponse",
    "DonationListResponse",
    "RewardListResponse",
    "RecurringCampaignsResponse",
    "HealthResponse",
    "ErrorResponse",
]
