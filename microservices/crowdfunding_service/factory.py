"""
Crowdfunding Service Factory

Factory for creating CrowdfundingService and its ledger store.
This is the ONLY module that imports concrete implementations.
"""

import logging
from typing import Optional

from core.config import CrowdfundingConfig, get_settings

from .crowdfunding_service import CrowdfundingService
from .ledger_store import InMemoryKeyValueStore

logger = logging.getLogger(__name__)


def create_ledger_store() -> InMemoryKeyValueStore:
    """Create an empty ledger store"""
    return InMemoryKeyValueStore()


def create_crowdfunding_service(
    config: Optional[CrowdfundingConfig] = None,
    event_bus=None,
) -> CrowdfundingService:
    """
    Create CrowdfundingService with all real dependencies

    Args:
        config: Optional service config (global settings if not provided)
        event_bus: Optional event bus, ignored when events are disabled

    Returns:
        Fully initialized CrowdfundingService instance
    """
    if config is None:
        config = get_settings()

    if event_bus is not None and not config.events_enabled:
        logger.info("Event publishing disabled by configuration")
        event_bus = None

    logger.info("CrowdfundingService created with real dependencies")

    return CrowdfundingService(event_bus=event_bus, list_limit=config.list_limit)


__all__ = ["create_crowdfunding_service", "create_ledger_store"]
