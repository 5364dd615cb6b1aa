"""Base for mock x402-priced service agents."""

import asyncio
import random
from datetime import datetime, timezone
from typing import Protocol

from ..config import NETWORK_NAME
from ..logging_config import get_logger

logger = get_logger(__name__)


class IServiceAgent(Protocol):
    """A single priced capability behind one HTTP endpoint."""

    @property
    def agent_id(self) -> str:
        """Agent identifier (registry key)."""
        ...

    async def handle(self, request: dict) -> dict:
        """Answer one request. Never fails."""
        ...


class MockServiceAgent:
    """Sleeps a randomized latency, then returns a canned JSON document."""

    agent_id: str = ""
    agent_name: str = ""
    price: str = "0"
    latency_range: tuple[float, float] = (0.1, 0.2)  # seconds

    def __init__(self, latency_scale: float = 1.0):
        self._latency_scale = latency_scale

    async def handle(self, request: dict) -> dict:
        """Simulate processing time and build the response envelope."""
        if not isinstance(request, dict):
            request = {}

        await self._simulate_latency()

        response = {
            "agent": self.agent_name,
            "agentId": self.agent_id,
            "_price": self.price,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }
        response.update(self.respond(request))
        response.setdefault("metadata", {})
        response["metadata"].setdefault("protocol", "x402")
        response["metadata"].setdefault("network", NETWORK_NAME)

        logger.debug("%s answered: %s", self.agent_id, response["recommendation"])
        return response

    def respond(self, request: dict) -> dict:
        """Agent-specific body. Must include a recommendation."""
        raise NotImplementedError

    async def _simulate_latency(self) -> None:
        low, high = self.latency_range
        await asyncio.sleep(random.uniform(low, high) * self._latency_scale)
