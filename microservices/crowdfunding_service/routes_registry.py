"""
Crowdfunding Service Routes Registry

Defines service metadata and routes for service discovery and API documentation.
"""

SERVICE_METADATA = {
    "service_name": "crowdfunding_service",
    "version": "1.0.0",
    "tags": ["v1", "crowdfunding", "ledger", "microservice"],
    "capabilities": [
        "business_registry",
        "campaign_management",
        "donation_processing",
        "reward_claims",
        "recurring_donation_index",
    ],
}

API_PREFIX = "/api/v1/crowdfunding"

# Route definitions for API documentation and service discovery
ROUTES = [
    # Health endpoints
    {"path": "/health", "methods": ["GET"], "description": "Health check"},

    # Businesses
    {"path": f"{API_PREFIX}/businesses", "methods": ["POST"], "description": "Register business"},
    {"path": f"{API_PREFIX}/businesses/{{business_id}}", "methods": ["GET"], "description": "Get business"},

    # Campaigns
    {"path": f"{API_PREFIX}/campaigns", "methods": ["POST"], "description": "Create campaign"},
    {"path": f"{API_PREFIX}/campaigns", "methods": ["GET"], "description": "List campaigns"},
    {"path": f"{API_PREFIX}/campaigns/{{campaign_id}}", "methods": ["GET"], "description": "Get campaign"},
    {"path": f"{API_PREFIX}/campaigns/{{campaign_id}}/progress", "methods": ["POST"], "description": "Add progress report"},

    # Donations
    {"path": f"{API_PREFIX}/campaigns/{{campaign_id}}/donations", "methods": ["POST"], "description": "Donate"},
    {"path": f"{API_PREFIX}/campaigns/{{campaign_id}}/donations", "methods": ["GET"], "description": "List donations"},
    {"path": f"{API_PREFIX}/donors/{{donor}}/recurring", "methods": ["GET"], "description": "Recurring campaigns of donor"},

    # Rewards
    {"path": f"{API_PREFIX}/campaigns/{{campaign_id}}/rewards/{{reward_id}}/claim", "methods": ["POST"], "description": "Claim reward"},
    {"path": f"{API_PREFIX}/campaigns/{{campaign_id}}/rewards/claimable", "methods": ["GET"], "description": "Claimable rewards of caller"},
]


def get_routes_metadata():
    """Get route metadata for service registration"""
    route_paths = [r["path"] for r in ROUTES]
    return {
        "route_count": str(len(ROUTES)),
        "routes": ",".join(route_paths[:10]),
        "api_version": "v1",
    }


__all__ = ["SERVICE_METADATA", "API_PREFIX", "ROUTES", "get_routes_metadata"]
