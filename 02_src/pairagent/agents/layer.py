"""AgentLayer: holds the mock service agents behind the HTTP routes."""

from typing import Protocol

from ..config import DEFAULT_DEVICE_ID
from .base import IServiceAgent
from .pricing import PricingAgent
from .routing import RoutingAgent
from .slot import SlotAgent
from .weather import WeatherAgent


class IAgentLayer(Protocol):
    """Lookup of service agents by id."""

    def register_agent(self, agent: IServiceAgent) -> None:
        """Register an agent."""
        ...

    def get(self, agent_id: str) -> IServiceAgent:
        """Get a registered agent. Raises KeyError if unknown."""
        ...


class AgentLayer:
    """Registry of live service agent instances."""

    def __init__(self):
        self._agents: dict[str, IServiceAgent] = {}

    def register_agent(self, agent: IServiceAgent) -> None:
        """Register an agent."""
        self._agents[agent.agent_id] = agent

    def get(self, agent_id: str) -> IServiceAgent:
        return self._agents[agent_id]

    @property
    def agent_ids(self) -> list[str]:
        return list(self._agents)


def create_default_layer(
    latency_scale: float = 1.0, device_id: str = DEFAULT_DEVICE_ID
) -> AgentLayer:
    """Layer with the four mock agents."""
    layer = AgentLayer()
    layer.register_agent(WeatherAgent(latency_scale))
    layer.register_agent(PricingAgent(latency_scale))
    layer.register_agent(RoutingAgent(latency_scale))
    layer.register_agent(SlotAgent(latency_scale, device_id=device_id))
    return layer
