"""PairAgent core module."""

from .agents import AgentLayer, IAgentLayer, IServiceAgent
from .app import Application, IApplication
from .config import Settings
from .llm import ILLMProvider, LLMProvider
from .models import (
    AgentActivity,
    AgentCallResult,
    AgentConfig,
    AgentStatus,
    DeviceState,
    Location,
    LogEntry,
    LogType,
    OrchestratorPlan,
    OrchestratorStep,
    PaymentResult,
    Scenario,
)
from .payments import (
    IPaymentExecutor,
    OnChainPaymentExecutor,
    PaymentGate,
    SimulatedPaymentExecutor,
    create_payment_executor,
)
from .planning import LLMPlanner, PlanResolver, PlanningError, RuleBasedPlanner
from .registry import AgentRegistry, IAgentRegistry

__all__ = [
    # Application
    "Application",
    "IApplication",
    "Settings",
    # Models
    "DeviceState",
    "Location",
    "Scenario",
    "OrchestratorPlan",
    "OrchestratorStep",
    "AgentConfig",
    "AgentStatus",
    "AgentActivity",
    "AgentCallResult",
    "PaymentResult",
    "LogEntry",
    "LogType",
    # Components
    "IAgentRegistry",
    "AgentRegistry",
    "IServiceAgent",
    "IAgentLayer",
    "AgentLayer",
    "ILLMProvider",
    "LLMProvider",
    "RuleBasedPlanner",
    "LLMPlanner",
    "PlanResolver",
    "PlanningError",
    "IPaymentExecutor",
    "SimulatedPaymentExecutor",
    "OnChainPaymentExecutor",
    "create_payment_executor",
    "PaymentGate",
]
