"""Agent registry module."""

from .registry import AGENT_REGISTRY, AgentRegistry, IAgentRegistry, device_profile

__all__ = ["AGENT_REGISTRY", "AgentRegistry", "IAgentRegistry", "device_profile"]
