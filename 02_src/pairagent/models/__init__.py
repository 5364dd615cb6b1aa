"""Core data models for PairAgent."""

from .agents import (
    AgentActivity,
    AgentCallResult,
    AgentConfig,
    AgentStatus,
    PaymentResult,
)
from .dashboard import LogEntry, LogType
from .device import DeviceState, Location, Scenario
from .plan import OrchestratorPlan, OrchestratorStep

__all__ = [
    # Device
    "DeviceState",
    "Location",
    "Scenario",
    # Plans
    "OrchestratorPlan",
    "OrchestratorStep",
    # Agents
    "AgentConfig",
    "AgentStatus",
    "AgentActivity",
    "AgentCallResult",
    "PaymentResult",
    # Dashboard
    "LogEntry",
    "LogType",
]
