#!/usr/bin/env python3
"""
NATS Event Bus

Publishes service events as JSON messages on NATS subjects.
"""

import json
import logging
from decimal import Decimal
from typing import Any, Dict, Optional

import nats

logger = logging.getLogger(__name__)


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that handles Decimal types"""
    def default(self, obj):
        if isinstance(obj, Decimal):
            return float(obj)
        return super().default(obj)


class NATSEventBus:
    """Event bus over a NATS connection"""

    def __init__(self, service_name: str, url: str = "nats://localhost:4222"):
        self.service_name = service_name
        self.url = url
        self._client = None

    async def connect(self):
        """Connect to NATS"""
        try:
            self._client = await nats.connect(self.url, name=self.service_name)
            logger.info(f"Connected to NATS at {self.url} as {self.service_name}")
        except Exception as e:
            logger.error(f"Failed to connect to NATS at {self.url}: {e}")
            raise

    async def publish(self, subject: str, data: Dict[str, Any]) -> None:
        """Publish data as JSON on subject"""
        if not self.is_connected:
            raise ConnectionError("NATS event bus is not connected")
        payload = json.dumps(data, cls=DecimalEncoder).encode("utf-8")
        await self._client.publish(subject, payload)

    async def close(self):
        """Drain and close the NATS connection"""
        if self._client:
            await self._client.drain()
            self._client = None
        logger.info("Disconnected from NATS")

    @property
    def is_connected(self) -> bool:
        """Check if connected to NATS"""
        return self._client is not None and self._client.is_connected


# Singleton instance
_event_bus: Optional[NATSEventBus] = None


async def get_event_bus(service_name: str, url: str = "nats://localhost:4222") -> NATSEventBus:
    """
    Get or create event bus instance.

    Args:
        service_name: Name of the service using the event bus
        url: NATS server URL

    Returns:
        Connected NATSEventBus instance
    """
    global _event_bus

    if _event_bus is None:
        bus = NATSEventBus(service_name=service_name, url=url)
        await bus.connect()
        _event_bus = bus

    return _event_bus


__all__ = ["NATSEventBus", "get_event_bus"]
