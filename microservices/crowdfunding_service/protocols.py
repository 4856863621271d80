"""
Crowdfunding Service Protocols

Defines interfaces for dependency injection and testing.
Following the protocol-based architecture pattern.
"""

from typing import Any, Dict, Hashable, Optional, Protocol, Tuple

from .models import CampaignStatus


LedgerKey = Tuple[Hashable, ...]


# ====================
# Storage Protocol
# ====================


class KeyValueStoreProtocol(Protocol):
    """Protocol for the persistent key-value store backing the ledger"""

    def get(self, key: LedgerKey) -> Optional[Any]:
        """Get the value stored under key, or None"""
        ...

    def put(self, key: LedgerKey, value: Any) -> None:
        """Store value under key"""
        ...

    def __contains__(self, key: object) -> bool:
        ...


# ====================
# Event Bus Protocol
# ====================


class EventBusProtocol(Protocol):
    """Protocol for event bus operations"""

    async def publish(self, subject: str, data: Dict[str, Any]) -> None:
        """Publish event"""
        ...

    async def close(self) -> None:
        """Close event bus connection"""
        ...


# ====================
# Custom Exceptions
# ====================


class CrowdfundingServiceError(Exception):
    """Base exception for crowdfunding ledger failures"""

    error_code = "crowdfunding_error"


class InvalidInputError(CrowdfundingServiceError):
    """Raised for malformed input: zero amounts, empty strings, bad dates, duplicate tiers"""

    error_code = "invalid_input"

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.field = field


class NotFoundError(CrowdfundingServiceError):
    """Raised when a campaign, business, donation or reward does not exist"""

    error_code = "not_found"

    def __init__(self, message: str, resource: Optional[str] = None):
        super().__init__(message)
        self.resource = resource


class UnauthorizedError(CrowdfundingServiceError):
    """Raised when a non-owner attempts an owner-only mutation"""

    error_code = "unauthorized"


class InvalidStateError(CrowdfundingServiceError):
    """Raised when the campaign status does not allow the operation"""

    error_code = "invalid_state"

    def __init__(self, message: str, current_status: Optional[CampaignStatus] = None):
        super().__init__(message)
        self.current_status = current_status


class AmountOverflowError(CrowdfundingServiceError):
    """Raised when checked arithmetic would exceed the representable amount range"""

    error_code = "overflow"


class IneligibleError(CrowdfundingServiceError):
    """Raised when a donor's contribution is below the tier threshold"""

    error_code = "ineligible"

    def __init__(self, message: str, required: int = 0, contributed: int = 0):
        super().__init__(message)
        self.required = required
        self.contributed = contributed


class AlreadyClaimedError(CrowdfundingServiceError):
    """Raised when a donor claims the same reward tier twice"""

    error_code = "already_claimed"


__all__ = [
    "LedgerKey",
    "KeyValueStoreProtocol",
    "EventBusProtocol",
    "CrowdfundingServiceError",
    "InvalidInputError",
    "NotFoundError",
    "UnauthorizedError",
    "InvalidStateError",
    "AmountOverflowError",
    "IneligibleError",
    "AlreadyClaimedError",
]
