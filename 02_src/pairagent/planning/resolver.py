"""Two-stage plan resolver: optional LLM planner over a rule-based fallback."""

from dataclasses import dataclass
from typing import Protocol

from ..logging_config import get_logger
from ..models import DeviceState, OrchestratorPlan
from .rules import RuleBasedPlanner

logger = get_logger(__name__)

METHOD_LLM = "llm"
METHOD_RULES = "rule-based"


class IPlanner(Protocol):
    """Produces a plan or raises."""

    async def create_plan(self, state: DeviceState) -> OrchestratorPlan:
        ...


@dataclass(frozen=True)
class ResolvedPlan:
    plan: OrchestratorPlan
    method: str  # METHOD_LLM or METHOD_RULES


class PlanResolver:
    """Always returns a plan. The primary planner is best-effort."""

    def __init__(
        self,
        fallback: RuleBasedPlanner | None = None,
        primary: IPlanner | None = None,
    ):
        self._fallback = fallback or RuleBasedPlanner()
        self._primary = primary

    @property
    def has_primary(self) -> bool:
        return self._primary is not None

    async def resolve(self, state: DeviceState) -> ResolvedPlan:
        if self._primary is not None:
            try:
                plan = await self._primary.create_plan(state)
                return ResolvedPlan(plan=plan, method=METHOD_LLM)
            except Exception as e:
                logger.warning("LLM planning failed, using rules: %s", e)

        return ResolvedPlan(plan=self._fallback.create_plan(state), method=METHOD_RULES)
