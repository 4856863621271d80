"""
Crowdfunding Ledger Store

Logical key space of the ledger, the in-memory key-value store, and the
call-scoped transaction that makes every operation all-or-nothing.
"""

import copy
import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

from .models import MAX_AMOUNT
from .protocols import AmountOverflowError, KeyValueStoreProtocol, LedgerKey

logger = logging.getLogger(__name__)


ID_SPACES = ("business", "campaign", "donation")


class LedgerKeys:
    """Builders for every key the ledger reads or writes"""

    @staticmethod
    def counter(space: str) -> LedgerKey:
        if space not in ID_SPACES:
            raise ValueError(f"Unknown id space: {space}")
        return ("counter", space)

    @staticmethod
    def clock() -> LedgerKey:
        return ("clock",)

    @staticmethod
    def business(business_id: int) -> LedgerKey:
        return ("business", business_id)

    @staticmethod
    def campaign(campaign_id: int) -> LedgerKey:
        return ("campaign", campaign_id)

    @staticmethod
    def donation(campaign_id: int, sequence: int) -> LedgerKey:
        return ("donation", campaign_id, sequence)

    @staticmethod
    def donation_ref(donation_id: int) -> LedgerKey:
        return ("donation_ref", donation_id)

    @staticmethod
    def contribution(campaign_id: int, donor: str) -> LedgerKey:
        return ("contribution", campaign_id, donor)

    @staticmethod
    def claim(campaign_id: int, reward_id: int, donor: str) -> LedgerKey:
        # Tier ids are only unique within a campaign
        return ("claim", campaign_id, reward_id, donor)

    @staticmethod
    def recurring(donor: str) -> LedgerKey:
        return ("recurring", donor)


def checked_add(current: int, amount: int, limit: int = MAX_AMOUNT) -> int:
    """Add two amounts, raising AmountOverflowError instead of exceeding limit"""
    total = current + amount
    if total > limit:
        raise AmountOverflowError(
            f"Amount overflow: {current} + {amount} exceeds maximum {limit}"
        )
    return total


class InMemoryKeyValueStore:
    """Dict-backed key-value store. Values are copied on the way in and out."""

    def __init__(self, initial: Optional[Dict[LedgerKey, Any]] = None):
        self._data: Dict[LedgerKey, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: LedgerKey) -> Optional[Any]:
        return copy.deepcopy(self._data.get(key))

    def put(self, key: LedgerKey, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)

    def snapshot(self) -> Dict[LedgerKey, Any]:
        """Deep copy of the whole store"""
        return copy.deepcopy(self._data)

    def health_check(self) -> bool:
        return True


class LedgerTransaction:
    """
    Buffers the writes of a single call against a store.

    Reads observe the transaction's own pending writes first. Nothing reaches
    the store until commit(); a discarded transaction leaves it untouched.
    """

    def __init__(self, store: KeyValueStoreProtocol):
        self.store = store
        self._writes: Dict[LedgerKey, Any] = {}
        self._committed = False

    def get(self, key: LedgerKey, default: Any = None) -> Any:
        if key in self._writes:
            return copy.deepcopy(self._writes[key])
        value = self.store.get(key)
        return default if value is None else value

    def put(self, key: LedgerKey, value: Any) -> None:
        if self._committed:
            raise RuntimeError("Transaction already committed")
        self._writes[key] = copy.deepcopy(value)

    def __contains__(self, key: object) -> bool:
        return key in self._writes or key in self.store

    def commit(self) -> None:
        if self._committed:
            raise RuntimeError("Transaction already committed")
        for key, value in self._writes.items():
            self.store.put(key, value)
        self._committed = True
        logger.debug(f"Committed {len(self._writes)} ledger writes")

    def discard(self) -> None:
        self._writes.clear()

    # Counters and clock

    def next_id(self, space: str) -> int:
        """Advance and return the id counter of space"""
        key = LedgerKeys.counter(space)
        next_value = self.get(key, 0) + 1
        self.put(key, next_value)
        return next_value

    def effective_time(self, call_time: int) -> int:
        """Call time, never earlier than the last committed mutation"""
        return max(call_time, self.get(LedgerKeys.clock(), 0))

    def advance_clock(self, now: int) -> None:
        if now > self.get(LedgerKeys.clock(), 0):
            self.put(LedgerKeys.clock(), now)


@contextmanager
def ledger_transaction(store: KeyValueStoreProtocol) -> Iterator[LedgerTransaction]:
    """Commit on normal exit, discard every pending write if an exception escapes"""
    txn = LedgerTransaction(store)
    try:
        yield txn
    except Exception:
        txn.discard()
        raise
    txn.commit()


__all__ = [
    "ID_SPACES",
    "LedgerKeys",
    "checked_add",
    "InMemoryKeyValueStore",
    "LedgerTransaction",
    "ledger_transaction",
]
