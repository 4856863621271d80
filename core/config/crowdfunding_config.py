#!/usr/bin/env python3
"""Crowdfunding service configuration"""
import os
from dataclasses import dataclass, field

from .logging_config import LoggingConfig

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class CrowdfundingConfig:
    """Crowdfunding service settings"""

    # ===========================================
    # Service
    # ===========================================
    service_name: str = "crowdfunding_service"
    service_host: str = "0.0.0.0"
    service_port: int = 8260
    debug: bool = False
    environment: str = "development"

    # ===========================================
    # Ledger
    # ===========================================
    events_enabled: bool = False
    nats_url: str = "nats://localhost:4222"
    list_limit: int = 100

    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @property
    def log_level(self) -> str:
        return self.logging.log_level

    @classmethod
    def from_env(cls) -> 'CrowdfundingConfig':
        """Load crowdfunding configuration from environment variables"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        return cls(
            service_host=os.getenv("CROWDFUNDING_SERVICE_HOST", "0.0.0.0"),
            service_port=_int(os.getenv("CROWDFUNDING_SERVICE_PORT", "8260"), 8260),
            debug=_bool(os.getenv("DEBUG", "false")),
            environment=env,
            events_enabled=_bool(os.getenv("CROWDFUNDING_EVENTS_ENABLED", "false")),
            nats_url=os.getenv("NATS_URL", "nats://localhost:4222"),
            list_limit=_int(os.getenv("CROWDFUNDING_LIST_LIMIT", "100"), 100),
            logging=LoggingConfig.from_env(),
        )
