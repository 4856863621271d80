"""
Crowdfunding Microservice API

Crowdfunding ledger with business registration, campaigns, donations and
reward claims.

Sender identity arrives in the X-Sender-Id header, set by the authenticating
gateway. Call time arrives in the X-Call-Time header as integer seconds and
is the only clock the ledger uses.
"""

import os
import sys
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Header, HTTPException, Query, Request
from fastapi.responses import JSONResponse

# Add parent directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))
from core.config import get_settings
from core.logger import setup_service_logger
from core.nats_client import get_event_bus

from .crowdfunding_service import CrowdfundingService
from .factory import create_crowdfunding_service, create_ledger_store
from .ledger_store import InMemoryKeyValueStore
from .models import (
    Ack,
    Business,
    BusinessCreatedResponse,
    CallContext,
    CampaignCreatedResponse,
    CampaignListResponse,
    CampaignStatus,
    CampaignView,
    CreateCampaignRequest,
    DonateRequest,
    DonationListResponse,
    DonationReceipt,
    ErrorResponse,
    HealthResponse,
    RecurringCampaignsResponse,
    RegisterBusinessRequest,
    RewardListResponse,
    UpdateProgressRequest,
)
from .protocols import (
    AlreadyClaimedError,
    AmountOverflowError,
    CrowdfundingServiceError,
    IneligibleError,
    InvalidInputError,
    InvalidStateError,
    NotFoundError,
    UnauthorizedError,
)
from .routes_registry import API_PREFIX, SERVICE_METADATA, get_routes_metadata

# Load configuration
config = get_settings()

# Configure logger
logger = setup_service_logger("crowdfunding_service", level=config.log_level)

# Global variables
crowdfunding_service: Optional[CrowdfundingService] = None
ledger_store: Optional[InMemoryKeyValueStore] = None
event_bus = None
SERVICE_PORT = config.service_port or 8260

ERROR_STATUS_CODES = {
    InvalidInputError: 400,
    NotFoundError: 404,
    UnauthorizedError: 403,
    InvalidStateError: 409,
    AmountOverflowError: 422,
    IneligibleError: 422,
    AlreadyClaimedError: 409,
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    global crowdfunding_service, ledger_store, event_bus

    try:
        if config.events_enabled:
            try:
                event_bus = await get_event_bus("crowdfunding_service", url=config.nats_url)
                logger.info("Event bus initialized successfully")
            except Exception as e:
                logger.warning(
                    f"Failed to initialize event bus: {e}. Continuing without event publishing."
                )
                event_bus = None

        ledger_store = create_ledger_store()
        crowdfunding_service = create_crowdfunding_service(config=config, event_bus=event_bus)

        route_meta = get_routes_metadata()
        logger.info(
            f"Crowdfunding service started on port {SERVICE_PORT} "
            f"({route_meta['route_count']} routes)"
        )
        yield

    except Exception as e:
        logger.error(f"Failed to initialize crowdfunding service: {e}")
        raise
    finally:
        if event_bus:
            try:
                await event_bus.close()
                logger.info("Crowdfunding event bus closed")
            except Exception as e:
                logger.error(f"Error closing event bus: {e}")


# Create FastAPI app
app = FastAPI(
    title="Crowdfunding Service",
    description="Crowdfunding ledger with campaigns, donations and reward claims",
    version=SERVICE_METADATA["version"],
    lifespan=lifespan,
)


# ====================
# Dependency Injection
# ====================


async def get_crowdfunding_service() -> CrowdfundingService:
    """Get crowdfunding service instance"""
    if not crowdfunding_service:
        raise HTTPException(status_code=503, detail="Crowdfunding service not initialized")
    return crowdfunding_service


async def get_ledger_store() -> InMemoryKeyValueStore:
    """Get the ledger store"""
    if ledger_store is None:
        raise HTTPException(status_code=503, detail="Ledger store not initialized")
    return ledger_store


async def get_call_context(
    x_sender_id: str = Header(..., min_length=1),
    x_call_time: int = Header(..., ge=0),
) -> CallContext:
    """Build the call context from gateway headers"""
    return CallContext(sender=x_sender_id, current_time=x_call_time)


async def get_call_time(x_call_time: int = Header(..., ge=0)) -> int:
    return x_call_time


# ====================
# Health Check
# ====================


@app.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check"""
    is_healthy = ledger_store is not None and ledger_store.health_check()
    return HealthResponse(
        status="healthy" if is_healthy else "degraded",
        service=SERVICE_METADATA["service_name"],
        port=SERVICE_PORT,
        version=SERVICE_METADATA["version"],
    )


# ====================
# Business API
# ====================


@app.post(f"{API_PREFIX}/businesses", response_model=BusinessCreatedResponse)
async def register_business(
    request: RegisterBusinessRequest,
    ctx: CallContext = Depends(get_call_context),
    store: InMemoryKeyValueStore = Depends(get_ledger_store),
    service: CrowdfundingService = Depends(get_crowdfunding_service),
):
    """Register a business owned by the sender"""
    business = await service.register_business(
        store, ctx, name=request.name, description=request.description
    )
    return BusinessCreatedResponse(business_id=business.business_id)


@app.get(f"{API_PREFIX}/businesses/{{business_id}}", response_model=Business)
async def get_business(
    business_id: int,
    store: InMemoryKeyValueStore = Depends(get_ledger_store),
    service: CrowdfundingService = Depends(get_crowdfunding_service),
):
    """Get business by ID"""
    return await service.get_business(store, business_id)


# ====================
# Campaign API
# ====================


@app.post(f"{API_PREFIX}/campaigns", response_model=CampaignCreatedResponse)
async def create_campaign(
    request: CreateCampaignRequest,
    ctx: CallContext = Depends(get_call_context),
    store: InMemoryKeyValueStore = Depends(get_ledger_store),
    service: CrowdfundingService = Depends(get_crowdfunding_service),
):
    """Create a campaign owned by the sender"""
    campaign = await service.create_campaign(
        store,
        ctx,
        title=request.title,
        description=request.description,
        target_amount=request.target_amount,
        campaign_type=request.campaign_type,
        start_date=request.start_date,
        end_date=request.end_date,
        social_links=request.social_links,
        reward_tiers=request.reward_tiers,
    )
    return CampaignCreatedResponse(campaign_id=campaign.campaign_id)


@app.get(f"{API_PREFIX}/campaigns", response_model=CampaignListResponse)
async def list_campaigns(
    status: Optional[CampaignStatus] = Query(default=None),
    owner: Optional[str] = Query(default=None),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    current_time: int = Depends(get_call_time),
    store: InMemoryKeyValueStore = Depends(get_ledger_store),
    service: CrowdfundingService = Depends(get_crowdfunding_service),
):
    """List campaigns with their live status"""
    campaigns, total = await service.list_campaigns(
        store, current_time, status=status, owner=owner, limit=limit, offset=offset
    )
    return CampaignListResponse(campaigns=campaigns, total=total)


@app.get(f"{API_PREFIX}/campaigns/{{campaign_id}}", response_model=CampaignView)
async def get_campaign(
    campaign_id: int,
    current_time: int = Depends(get_call_time),
    store: InMemoryKeyValueStore = Depends(get_ledger_store),
    service: CrowdfundingService = Depends(get_crowdfunding_service),
):
    """Get campaign by ID with its live status"""
    return await service.get_campaign(store, campaign_id, current_time)


@app.post(f"{API_PREFIX}/campaigns/{{campaign_id}}/progress", response_model=Ack)
async def update_progress(
    campaign_id: int,
    request: UpdateProgressRequest,
    ctx: CallContext = Depends(get_call_context),
    store: InMemoryKeyValueStore = Depends(get_ledger_store),
    service: CrowdfundingService = Depends(get_crowdfunding_service),
):
    """Append a progress report (owner only)"""
    return await service.update_progress(store, ctx, campaign_id, request.progress_report)


# ====================
# Donation API
# ====================


@app.post(f"{API_PREFIX}/campaigns/{{campaign_id}}/donations", response_model=DonationReceipt)
async def donate(
    campaign_id: int,
    request: DonateRequest,
    ctx: CallContext = Depends(get_call_context),
    store: InMemoryKeyValueStore = Depends(get_ledger_store),
    service: CrowdfundingService = Depends(get_crowdfunding_service),
):
    """Donate to a campaign"""
    return await service.donate(
        store, ctx, campaign_id, amount=request.amount, recurring=request.recurring
    )


@app.get(f"{API_PREFIX}/campaigns/{{campaign_id}}/donations", response_model=DonationListResponse)
async def list_donations(
    campaign_id: int,
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: InMemoryKeyValueStore = Depends(get_ledger_store),
    service: CrowdfundingService = Depends(get_crowdfunding_service),
):
    """List donations of a campaign in arrival order"""
    donations, total = await service.list_donations(
        store, campaign_id, limit=limit, offset=offset
    )
    return DonationListResponse(donations=donations, total=total)


@app.get(f"{API_PREFIX}/donors/{{donor}}/recurring", response_model=RecurringCampaignsResponse)
async def list_recurring_campaigns(
    donor: str,
    store: InMemoryKeyValueStore = Depends(get_ledger_store),
    service: CrowdfundingService = Depends(get_crowdfunding_service),
):
    """Campaigns a donor has made recurring donations to"""
    campaign_ids = await service.list_recurring_campaigns(store, donor)
    return RecurringCampaignsResponse(donor=donor, campaign_ids=campaign_ids)


# ====================
# Reward API
# ====================


@app.post(
    f"{API_PREFIX}/campaigns/{{campaign_id}}/rewards/{{reward_id}}/claim",
    response_model=Ack,
)
async def claim_reward(
    campaign_id: int,
    reward_id: int,
    ctx: CallContext = Depends(get_call_context),
    store: InMemoryKeyValueStore = Depends(get_ledger_store),
    service: CrowdfundingService = Depends(get_crowdfunding_service),
):
    """Claim a reward tier for the sender"""
    return await service.claim_reward(store, ctx, campaign_id, reward_id)


@app.get(
    f"{API_PREFIX}/campaigns/{{campaign_id}}/rewards/claimable",
    response_model=RewardListResponse,
)
async def list_claimable_rewards(
    campaign_id: int,
    ctx: CallContext = Depends(get_call_context),
    store: InMemoryKeyValueStore = Depends(get_ledger_store),
    service: CrowdfundingService = Depends(get_crowdfunding_service),
):
    """Reward tiers the sender can claim now"""
    rewards = await service.list_claimable_rewards(
        store, campaign_id, ctx.sender, ctx.current_time
    )
    return RewardListResponse(rewards=rewards)


# ====================
# Error Handling
# ====================


@app.exception_handler(CrowdfundingServiceError)
async def crowdfunding_error_handler(request: Request, exc: CrowdfundingServiceError):
    """Map ledger failures to HTTP status codes"""
    status_code = ERROR_STATUS_CODES.get(type(exc), 400)
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(detail=str(exc), error_code=exc.error_code).model_dump(),
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler"""
    logger.error(f"Unhandled exception in {request.url}: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error occurred", "error_code": "internal_error"},
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "microservices.crowdfunding_service.main:app",
        host=config.service_host,
        port=SERVICE_PORT,
        reload=config.debug,
        log_level=config.log_level.lower(),
    )
