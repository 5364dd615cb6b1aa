"""Tests for plan generation."""

import json
from unittest.mock import AsyncMock, Mock

import pytest

from pairagent.models import DeviceState
from pairagent.planning import (
    METHOD_LLM,
    METHOD_RULES,
    LLMPlanner,
    PlanResolver,
    PlanningError,
    RuleBasedPlanner,
    build_system_prompt,
    parse_plan,
)
from pairagent.registry import AgentRegistry

CHARGE_ORDER = ["weather-agent", "pricing-agent", "routing-agent", "slot-agent"]
MAINTENANCE_ORDER = ["weather-agent", "pricing-agent", "routing-agent", "slot-agent"]
FLEET_ORDER = ["pricing-agent", "routing-agent", "weather-agent", "slot-agent"]


def agent_ids(plan):
    return [step.agent_id for step in plan.steps]


def llm_reply(**overrides):
    document = {
        "trigger": "Battery low",
        "reasoning": "Slot first, everything else is optional.",
        "steps": [
            {"agentId": "slot-agent", "agentName": "SlotNegotiator", "action": "Book", "params": {"duration": 20}},
            {"agentId": "weather-agent", "action": "Check sky", "params": {}},
        ],
        "estimatedCost": "$999",
        "estimatedTime": "~5 seconds",
    }
    document.update(overrides)
    return json.dumps(document)


class TestRuleBasedPlanner:
    """Tests for the deterministic rule table."""

    @pytest.mark.parametrize("scenario", [None, "charge"])
    def test_charge_plan(self, scenario):
        plan = RuleBasedPlanner().create_plan(DeviceState(battery_level=35, scenario=scenario))

        assert agent_ids(plan) == CHARGE_ORDER
        assert plan.estimated_cost == "$0.0110"
        assert plan.estimated_time == "~12 seconds"
        assert plan.steps[3].params["priority"] is False
        assert "35%" in plan.trigger

    def test_charge_plan_priority_below_threshold(self):
        plan = RuleBasedPlanner().create_plan(DeviceState(battery_level=19.5))

        assert plan.steps[3].params["priority"] is True
        assert plan.estimated_time == "~8 seconds (PRIORITY)"
        assert "priority booking" in plan.reasoning

    def test_threshold_is_exclusive(self):
        plan = RuleBasedPlanner().create_plan(DeviceState(battery_level=20))
        assert plan.steps[3].params["priority"] is False

    def test_maintenance_plan_checks_weather_first(self):
        plan = RuleBasedPlanner().create_plan(DeviceState(scenario="maintenance"))

        assert agent_ids(plan) == MAINTENANCE_ORDER
        assert plan.steps[0].agent_id == "weather-agent"
        assert plan.estimated_cost == "$0.0110"
        assert "Cost-optimized" in plan.reasoning

    def test_fleet_plan_checks_roi_first(self):
        plan = RuleBasedPlanner().create_plan(DeviceState(scenario="fleet"))

        assert agent_ids(plan) == FLEET_ORDER
        assert plan.steps[0].agent_id == "pricing-agent"
        assert plan.estimated_cost == "$0.0110"
        assert "ROI-optimized" in plan.reasoning

    @pytest.mark.parametrize("scenario", ["", "teleport", "MAINTENANCEX", "Maintenance ", "Fleet"])
    def test_unknown_scenario_falls_back_to_charge(self, scenario):
        plan = RuleBasedPlanner().create_plan(DeviceState(scenario=scenario))
        assert agent_ids(plan) == CHARGE_ORDER
        assert plan.reasoning.startswith("Speed-optimized")

    def test_weather_step_uses_location(self):
        state = DeviceState.from_payload({"location": {"lat": 10, "lng": 20}})
        plan = RuleBasedPlanner().create_plan(state)

        assert plan.steps[0].params == {"lat": 10.0, "lng": 20.0}

    def test_step_names_match_registry(self):
        registry = AgentRegistry()
        for scenario in ("charge", "maintenance", "fleet"):
            plan = RuleBasedPlanner().create_plan(DeviceState(scenario=scenario))
            for step in plan.steps:
                assert step.agent_name == registry.get(step.agent_id).name

    def test_is_deterministic(self):
        state = DeviceState(battery_level=12, scenario="fleet")
        assert RuleBasedPlanner().create_plan(state) == RuleBasedPlanner().create_plan(state)


class TestParsePlan:
    """Tests for LLM reply parsing."""

    def test_valid_reply(self):
        plan = parse_plan(llm_reply(), AgentRegistry())

        assert agent_ids(plan) == ["slot-agent", "weather-agent"]
        assert plan.steps[1].agent_name == "AtmoSense"
        assert plan.steps[0].params == {"duration": 20}
        # recomputed from nominal prices: 0.003 + 0.001
        assert plan.estimated_cost == "$0.0040"
        assert plan.estimated_time == "~5 seconds"

    def test_fenced_reply(self):
        plan = parse_plan(f"```json\n{llm_reply()}\n```", AgentRegistry())
        assert len(plan.steps) == 2

    @pytest.mark.parametrize(
        "text",
        [
            "not json",
            "[]",
            json.dumps({"trigger": "t"}),
            llm_reply(steps=[]),
            llm_reply(steps=[{"action": "no agent"}]),
        ],
    )
    def test_invalid_reply(self, text):
        with pytest.raises(PlanningError):
            parse_plan(text, AgentRegistry())

    def test_unknown_agent(self):
        with pytest.raises(PlanningError, match="unknown agent"):
            parse_plan(llm_reply(steps=[{"agentId": "teleport-agent"}]), AgentRegistry())


class TestLLMPlanner:
    """Tests for LLMPlanner."""

    def test_system_prompt_lists_catalogue(self):
        prompt = build_system_prompt(AgentRegistry())

        for agent in AgentRegistry().list():
            assert agent.id in prompt
            assert f"${agent.price_per_call}/call" in prompt
        assert '"estimatedCost"' in prompt

    @pytest.mark.asyncio
    async def test_create_plan_sends_state(self, mock_llm):
        mock_llm.complete = AsyncMock(return_value=llm_reply())
        planner = LLMPlanner(mock_llm, AgentRegistry())

        plan = await planner.create_plan(DeviceState(battery_level=9, scenario="charge"))

        assert agent_ids(plan) == ["slot-agent", "weather-agent"]
        kwargs = mock_llm.complete.call_args.kwargs
        assert "Battery 9%" in kwargs["messages"][0]["content"]
        assert kwargs["temperature"] == 0.3
        assert "pricing-agent" in kwargs["system"]

    @pytest.mark.asyncio
    async def test_llm_error_becomes_planning_error(self, mock_llm):
        mock_llm.complete = AsyncMock(side_effect=RuntimeError("LLM API error: boom"))
        planner = LLMPlanner(mock_llm, AgentRegistry())

        with pytest.raises(PlanningError, match="boom"):
            await planner.create_plan(DeviceState())


class TestPlanResolver:
    """Tests for PlanResolver."""

    @pytest.mark.asyncio
    async def test_without_primary_uses_rules(self):
        resolved = await PlanResolver().resolve(DeviceState(scenario="fleet"))

        assert resolved.method == METHOD_RULES
        assert agent_ids(resolved.plan) == FLEET_ORDER

    @pytest.mark.asyncio
    async def test_primary_plan_wins(self, mock_llm):
        mock_llm.complete = AsyncMock(return_value=llm_reply())
        resolver = PlanResolver(primary=LLMPlanner(mock_llm, AgentRegistry()))

        resolved = await resolver.resolve(DeviceState())

        assert resolved.method == METHOD_LLM
        assert agent_ids(resolved.plan) == ["slot-agent", "weather-agent"]

    @pytest.mark.asyncio
    async def test_unparseable_primary_falls_back(self, mock_llm):
        mock_llm.complete = AsyncMock(return_value="I think you should charge.")
        resolver = PlanResolver(primary=LLMPlanner(mock_llm, AgentRegistry()))

        resolved = await resolver.resolve(DeviceState(scenario="maintenance"))

        assert resolved.method == METHOD_RULES
        assert agent_ids(resolved.plan) == MAINTENANCE_ORDER

    @pytest.mark.asyncio
    async def test_failing_primary_falls_back(self, mock_llm):
        mock_llm.complete = AsyncMock(side_effect=Exception("network down"))
        resolver = PlanResolver(primary=LLMPlanner(mock_llm, AgentRegistry()))

        resolved = await resolver.resolve(DeviceState())

        assert resolved.method == METHOD_RULES
        assert resolved.plan.estimated_cost == "$0.0110"

    @pytest.mark.asyncio
    async def test_any_primary_exception_is_absorbed(self):
        primary = Mock()
        primary.create_plan = AsyncMock(side_effect=KeyError("weird"))

        resolved = await PlanResolver(primary=primary).resolve(DeviceState())

        assert resolved.method == METHOD_RULES
