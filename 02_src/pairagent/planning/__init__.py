"""Plan generation module."""

from .errors import PlanningError
from .llm_planner import LLMPlanner, build_system_prompt, parse_plan
from .resolver import METHOD_LLM, METHOD_RULES, IPlanner, PlanResolver, ResolvedPlan
from .rules import NOMINAL_PRICES, RuleBasedPlanner, format_cost
from .schema import PlanDocument, StepDocument

__all__ = [
    "PlanningError",
    "IPlanner",
    "LLMPlanner",
    "RuleBasedPlanner",
    "PlanResolver",
    "ResolvedPlan",
    "METHOD_LLM",
    "METHOD_RULES",
    "NOMINAL_PRICES",
    "format_cost",
    "build_system_prompt",
    "parse_plan",
    "PlanDocument",
    "StepDocument",
]
