"""Wire schema for orchestration plans."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class StepDocument(BaseModel):
    """One step as it appears on the wire."""

    model_config = ConfigDict(populate_by_name=True)

    agent_id: str = Field(alias="agentId", min_length=1)
    agent_name: str | None = Field(default=None, alias="agentName")
    action: str = ""
    params: dict[str, Any] = Field(default_factory=dict)


class PlanDocument(BaseModel):
    """Plan shape shared by the orchestrate route and the LLM planner."""

    model_config = ConfigDict(populate_by_name=True)

    trigger: str
    reasoning: str
    steps: list[StepDocument] = Field(min_length=1)
    estimated_cost: str | None = Field(default=None, alias="estimatedCost")
    estimated_time: str | None = Field(default=None, alias="estimatedTime")
