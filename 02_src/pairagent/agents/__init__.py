"""Mock service agents module."""

from .base import IServiceAgent, MockServiceAgent
from .layer import AgentLayer, IAgentLayer, create_default_layer
from .pricing import PricingAgent
from .routing import RoutingAgent
from .slot import SlotAgent
from .weather import WeatherAgent

__all__ = [
    "IServiceAgent",
    "MockServiceAgent",
    "IAgentLayer",
    "AgentLayer",
    "create_default_layer",
    "PricingAgent",
    "RoutingAgent",
    "SlotAgent",
    "WeatherAgent",
]
