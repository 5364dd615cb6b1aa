"""LLM-backed planner.

Asks the model for a plan in the same JSON shape the rule-based planner
produces, then validates it. Anything short of a valid plan whose steps all
name registry agents raises PlanningError.
"""

import json
import re

from pydantic import ValidationError

from ..llm import ILLMProvider
from ..logging_config import get_logger
from ..models import DeviceState, OrchestratorPlan, OrchestratorStep
from ..registry import IAgentRegistry
from .errors import PlanningError
from .rules import estimate_cost, format_cost
from .schema import PlanDocument

logger = get_logger(__name__)

_FENCE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)

PLAN_FORMAT = (
    '{ "trigger": "string", "reasoning": "string", "steps": [{"agentId": "string", '
    '"agentName": "string", "action": "string describing what the agent will do", '
    '"params": {}}], "estimatedCost": "string", "estimatedTime": "string" }'
)


def build_system_prompt(registry: IAgentRegistry) -> str:
    """Describe the agent catalogue and the expected reply format."""
    catalogue = "\n".join(
        f"- {agent.id} ({agent.name}): {agent.description}, ${agent.price_per_call}/call"
        for agent in registry.list()
    )
    return (
        "You are the AI brain of an autonomous EV (PairAgent). You decide which AI "
        "agents to hire and in what order.\n\n"
        f"Available agents:\n{catalogue}\n\n"
        f"Respond with JSON only: {PLAN_FORMAT}"
    )


def parse_plan(text: str, registry: IAgentRegistry) -> OrchestratorPlan:
    """Parse and validate a model reply. Raises PlanningError."""
    body = text.strip()
    fenced = _FENCE.match(body)
    if fenced:
        body = fenced.group(1)

    try:
        document = PlanDocument.model_validate(json.loads(body))
    except (json.JSONDecodeError, ValidationError) as e:
        raise PlanningError(f"Unparseable plan: {e}") from e

    steps = []
    for step in document.steps:
        agent = registry.get(step.agent_id)
        if agent is None:
            raise PlanningError(f"Plan references unknown agent {step.agent_id!r}")
        steps.append(
            OrchestratorStep(
                agent_id=agent.id,
                agent_name=agent.name,
                action=step.action or agent.description,
                params=step.params,
            )
        )

    steps = tuple(steps)
    return OrchestratorPlan(
        trigger=document.trigger,
        reasoning=document.reasoning,
        steps=steps,
        # the model's own arithmetic is not trusted
        estimated_cost=format_cost(estimate_cost(steps)),
        estimated_time=document.estimated_time or "~12 seconds",
    )


class LLMPlanner:
    """Non-deterministic planner on top of an ILLMProvider."""

    def __init__(
        self,
        llm_provider: ILLMProvider,
        registry: IAgentRegistry,
        temperature: float = 0.3,
        max_tokens: int = 1024,
    ):
        self._llm = llm_provider
        self._registry = registry
        self._temperature = temperature
        self._max_tokens = max_tokens
        self._system_prompt = build_system_prompt(registry)

    async def create_plan(self, state: DeviceState) -> OrchestratorPlan:
        try:
            reply = await self._llm.complete(
                messages=[{"role": "user", "content": state.describe()}],
                system=self._system_prompt,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
            )
        except Exception as e:
            raise PlanningError(f"LLM call failed: {e}") from e

        plan = parse_plan(reply, self._registry)
        logger.debug("LLM plan with %s steps", len(plan.steps))
        return plan
