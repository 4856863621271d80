"""
Business Registry

Registers businesses. Records are created once and never mutated.
"""

import logging
from typing import Optional

from .ledger_store import LedgerKeys, LedgerTransaction
from .models import Business, CallContext
from .protocols import InvalidInputError, NotFoundError

logger = logging.getLogger(__name__)


class BusinessRegistry:
    """Business records keyed by sequential id"""

    def register_business(
        self,
        txn: LedgerTransaction,
        ctx: CallContext,
        name: str,
        description: str,
    ) -> Business:
        """
        Register a new business owned by the caller.

        No deduplication by owner: every call creates a new record.
        """
        self._validate_text(name, "name")
        self._validate_text(description, "description")

        business = Business(
            business_id=txn.next_id("business"),
            owner=ctx.sender,
            name=name,
            description=description,
            created_at=txn.effective_time(ctx.current_time),
        )
        txn.put(LedgerKeys.business(business.business_id), business.model_dump(mode="json"))

        logger.info(f"Registered business {business.business_id} for owner {ctx.sender}")
        return business

    def find_business(self, txn: LedgerTransaction, business_id: int) -> Optional[Business]:
        data = txn.get(LedgerKeys.business(business_id))
        return Business.model_validate(data) if data is not None else None

    def get_business(self, txn: LedgerTransaction, business_id: int) -> Business:
        business = self.find_business(txn, business_id)
        if business is None:
            raise NotFoundError(f"Business {business_id} not found", "business")
        return business

    @staticmethod
    def _validate_text(value: str, field: str) -> None:
        if not value or not value.strip():
            raise InvalidInputError(f"Business {field} is required", field)


__all__ = ["BusinessRegistry"]
