"""Agent-related data models."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class AgentStatus(str, Enum):
    """Display status of a hired agent."""

    IDLE = "idle"
    ACTIVE = "active"
    RESPONDING = "responding"


@dataclass(frozen=True)
class AgentConfig:
    """Registry entry for a priced service agent."""

    id: str
    name: str
    type: str
    icon: str
    description: str
    price_per_call: str  # USDC, decimal string
    endpoint: str
    latency: str
    reputation: float
    color: str
    capabilities: tuple[str, ...] = ()

    @property
    def price(self) -> Decimal:
        return Decimal(self.price_per_call)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "icon": self.icon,
            "description": self.description,
            "pricePerCall": self.price_per_call,
            "endpoint": self.endpoint,
            "latency": self.latency,
            "reputation": self.reputation,
            "color": self.color,
            "capabilities": list(self.capabilities),
        }


@dataclass
class AgentActivity:
    """Mutable per-agent display counters."""

    agent_id: str
    calls: int = 0
    status: AgentStatus = AgentStatus.IDLE


@dataclass
class PaymentResult:
    """Outcome of paying for one agent call (real or simulated)."""

    success: bool
    tx_hash: str
    amount: str
    network: str
    on_chain: bool = False
    timestamp: float = 0.0


@dataclass
class AgentCallResult:
    """Agent payload plus its payment."""

    data: dict
    payment: PaymentResult
    latency: float  # seconds
