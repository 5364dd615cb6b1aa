"""Orchestration plan data models."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class OrchestratorStep:
    """A single agent invocation inside a plan."""

    agent_id: str
    agent_name: str
    action: str
    params: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "agentId": self.agent_id,
            "agentName": self.agent_name,
            "action": self.action,
            "params": dict(self.params),
        }


@dataclass(frozen=True)
class OrchestratorPlan:
    """Ordered agent-call plan produced once per orchestration call."""

    trigger: str
    reasoning: str
    steps: tuple[OrchestratorStep, ...]
    estimated_cost: str  # e.g. "$0.0110"
    estimated_time: str

    def to_dict(self) -> dict:
        return {
            "trigger": self.trigger,
            "reasoning": self.reasoning,
            "steps": [step.to_dict() for step in self.steps],
            "estimatedCost": self.estimated_cost,
            "estimatedTime": self.estimated_time,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "OrchestratorPlan":
        """Build from the camelCase wire shape. Raises KeyError/TypeError on bad input."""
        return cls(
            trigger=str(data["trigger"]),
            reasoning=str(data["reasoning"]),
            steps=tuple(
                OrchestratorStep(
                    agent_id=str(step["agentId"]),
                    agent_name=str(step.get("agentName", step["agentId"])),
                    action=str(step.get("action", "")),
                    params=dict(step.get("params") or {}),
                )
                for step in data["steps"]
            ),
            estimated_cost=str(data.get("estimatedCost", "")),
            estimated_time=str(data.get("estimatedTime", "")),
        )
