"""
Crowdfunding Service

Crowdfunding ledger microservice providing:
- Business registration
- Campaigns with reward tiers, deadlines and progress reports
- Donations with checked totals and per-donor contributions
- Single-use reward claims
- Recurring donation index for external schedulers

Port: 8260
"""

__version__ = "1.0.0"
__service__ = "crowdfunding_service"
