#!/usr/bin/env python3
"""
Core Module for the Crowdfunding Ledger

Shared infrastructure for the crowdfunding microservice.

COMPONENTS:
    - config/: Dataclass configuration loaded from environment (.env aware)
    - logger.py: Service logger setup

USAGE:
    from core.config import get_settings
    from core.logger import setup_service_logger

    settings = get_settings()
    logger = setup_service_logger("crowdfunding_service", level=settings.log_level)
"""

from .config import CrowdfundingConfig, LoggingConfig, get_settings, reload_settings
from .logger import setup_service_logger

# Export public API
__all__ = [
    "CrowdfundingConfig",
    "LoggingConfig",
    "get_settings",
    "reload_settings",
    "setup_service_logger",
]

__version__ = "1.0.0"
