"""Static agent registry and device profile."""

from typing import Protocol

from ..config import CHAIN_ID, NETWORK_NAME, Settings
from ..models import AgentConfig

AGENT_REGISTRY: tuple[AgentConfig, ...] = (
    AgentConfig(
        id="pricing-agent",
        name="ChargePricer",
        type="Pricing Oracle",
        icon="⚡",
        description="Real-time EV charging station price comparison across 12+ networks",
        price_per_call="0.002",
        endpoint="/api/agents/pricing",
        latency="~200ms",
        reputation=4.9,
        color="#00ff9d",
        capabilities=("price_comparison", "rate_forecast", "surge_detection"),
    ),
    AgentConfig(
        id="routing-agent",
        name="PathFinder",
        type="Route Optimizer",
        icon="🗺️",
        description="AI-optimized routing with energy consumption modeling",
        price_per_call="0.005",
        endpoint="/api/agents/routing",
        latency="~400ms",
        reputation=4.7,
        color="#00b4ff",
        capabilities=("route_optimization", "energy_modeling", "traffic_avoidance"),
    ),
    AgentConfig(
        id="weather-agent",
        name="AtmoSense",
        type="Weather Intelligence",
        icon="🌦️",
        description="Hyperlocal weather data affecting battery efficiency & route planning",
        price_per_call="0.001",
        endpoint="/api/agents/weather",
        latency="~150ms",
        reputation=4.8,
        color="#ff6b00",
        capabilities=("weather_forecast", "efficiency_impact", "road_conditions"),
    ),
    AgentConfig(
        id="slot-agent",
        name="SlotNegotiator",
        type="Booking Agent",
        icon="📅",
        description="Autonomous charging slot negotiation & reservation via A2A",
        price_per_call="0.003",
        endpoint="/api/agents/slot",
        latency="~350ms",
        reputation=4.6,
        color="#c084fc",
        capabilities=("slot_booking", "price_negotiation", "cancellation"),
    ),
)


class IAgentRegistry(Protocol):
    """Read-only catalogue of hireable agents."""

    def list(self) -> list[AgentConfig]:
        """All agents in registry order."""
        ...

    def get(self, agent_id: str) -> AgentConfig | None:
        """Lookup by identifier."""
        ...


class AgentRegistry:
    """In-process registry over a fixed agent tuple."""

    def __init__(self, agents: tuple[AgentConfig, ...] = AGENT_REGISTRY):
        self._agents = agents
        self._by_id = {agent.id: agent for agent in agents}

    def list(self) -> list[AgentConfig]:
        return list(self._agents)

    def get(self, agent_id: str) -> AgentConfig | None:
        return self._by_id.get(agent_id)

    def by_endpoint(self, endpoint: str) -> AgentConfig | None:
        for agent in self._agents:
            if agent.endpoint == endpoint:
                return agent
        return None

    def __contains__(self, agent_id: object) -> bool:
        return agent_id in self._by_id

    def __len__(self) -> int:
        return len(self._agents)


def device_profile(settings: Settings) -> dict:
    """Static description of the simulated device."""
    return {
        "type": "EV",
        "model": "PairAgent EV-X402",
        "pairpointId": settings.device_id,
        "erc8004Id": settings.erc8004_agent_id,
        "network": NETWORK_NAME,
        "chainId": CHAIN_ID,
        "encryption": "BITE Protocol",
    }
