"""Deterministic rule-based planner.

Three templates keyed by scenario. Each plan hires all four agents once; the
scenarios differ only in order and in what the early steps gate:

* charge (default): speed first. Weather and pricing are cheap inputs to the
  routing call, and the slot booking is flagged priority below 20% battery.
* maintenance: cost first. Weather ($0.001) is checked before routing
  ($0.005) so an infeasible outdoor diagnostic can stop the run early.
* fleet: ROI first. The pricing agent evaluates whether repositioning pays
  before anything else is bought.

The cost estimate is the sum of the registry's nominal prices. Agents are
never queried for their live price.
"""

from decimal import Decimal

from ..models import DeviceState, OrchestratorPlan, OrchestratorStep, Scenario
from ..registry import AGENT_REGISTRY

PRIORITY_BATTERY_THRESHOLD = 20

NOMINAL_PRICES: dict[str, Decimal] = {agent.id: agent.price for agent in AGENT_REGISTRY}
AGENT_NAMES: dict[str, str] = {agent.id: agent.name for agent in AGENT_REGISTRY}


def format_cost(amount: Decimal) -> str:
    return f"${amount:.4f}"


def estimate_cost(steps: tuple[OrchestratorStep, ...]) -> Decimal:
    return sum((NOMINAL_PRICES.get(step.agent_id, Decimal(0)) for step in steps), Decimal(0))


def _step(agent_id: str, action: str, **params) -> OrchestratorStep:
    return OrchestratorStep(
        agent_id=agent_id,
        agent_name=AGENT_NAMES[agent_id],
        action=action,
        params=params,
    )


class RuleBasedPlanner:
    """Maps a DeviceState to one of three fixed plan templates."""

    def create_plan(self, state: DeviceState) -> OrchestratorPlan:
        scenario = state.resolved_scenario
        if scenario is Scenario.MAINTENANCE:
            return self._maintenance_plan(state)
        if scenario is Scenario.FLEET:
            return self._fleet_plan(state)
        return self._charge_plan(state)

    def _maintenance_plan(self, state: DeviceState) -> OrchestratorPlan:
        steps = (
            _step(
                "weather-agent",
                "Checking conditions for outdoor diagnostic feasibility",
                lat=state.location.lat,
                lng=state.location.lng,
            ),
            _step(
                "pricing-agent",
                "Comparing diagnostic service rates across agent marketplace",
                type="diagnostic",
                radius=5,
            ),
            _step(
                "routing-agent",
                "Finding nearest covered service point with available agents",
                destination="nearest_diagnostic",
                batteryLevel=state.battery_level,
            ),
            _step(
                "slot-agent",
                "Reserving diagnostic bay + hiring BatteryDoc agent via A2A",
                type="diagnostic",
                duration=30,
            ),
        )
        return OrchestratorPlan(
            trigger="Scheduled maintenance window - hiring diagnostic agents",
            reasoning=(
                "Cost-optimized: Check weather FIRST ($0.001) before expensive routing "
                "($0.005). If outdoor diagnostic isn't feasible, we save 45% by skipping "
                "route calculation. AP2 conditional logic: 'Only route if weather permits'."
            ),
            steps=steps,
            estimated_cost=format_cost(estimate_cost(steps)),
            estimated_time="~12 seconds",
        )

    def _fleet_plan(self, state: DeviceState) -> OrchestratorPlan:
        steps = (
            _step(
                "pricing-agent",
                "Evaluating repositioning ROI: demand surge vs. fuel + opportunity cost",
                type="cost_benefit",
                radius=10,
            ),
            _step(
                "routing-agent",
                "Analyzing fleet positioning for demand prediction",
                mode="fleet_optimization",
                batteryLevel=state.battery_level,
            ),
            _step(
                "weather-agent",
                "Verifying route conditions for repositioning window",
                lat=state.location.lat,
                lng=state.location.lng,
            ),
            _step(
                "slot-agent",
                "Pre-booking priority pickup zone via municipal agent A2A",
                type="zone_reservation",
                duration=45,
            ),
        )
        return OrchestratorPlan(
            trigger="Fleet optimization signal - AI-driven repositioning for demand surge",
            reasoning=(
                "ROI-optimized: Calculate profitability FIRST ($0.002). If expected revenue "
                "< repositioning cost, abort early and save $0.009 (82% cost reduction). "
                "Multi-agent conditional workflow: 'Only reposition if profit > $5'."
            ),
            steps=steps,
            estimated_cost=format_cost(estimate_cost(steps)),
            estimated_time="~12 seconds",
        )

    def _charge_plan(self, state: DeviceState) -> OrchestratorPlan:
        battery = state.battery_level
        priority = battery < PRIORITY_BATTERY_THRESHOLD
        steps = (
            _step(
                "weather-agent",
                "Querying hyperlocal weather for route efficiency impact",
                lat=state.location.lat,
                lng=state.location.lng,
            ),
            _step(
                "pricing-agent",
                "Scanning 12 stations within 8km radius via x402 pay-per-query",
                radius=8,
                batteryLevel=battery,
            ),
            _step(
                "routing-agent",
                "Computing energy-optimal route accounting for weather + cheapest station",
                destination="gc7",
                batteryLevel=battery,
                weatherAware=True,
            ),
            _step(
                "slot-agent",
                "Negotiating charging slot with station agent via A2A protocol",
                stationId="gc7",
                duration=45,
                priority=priority,
            ),
        )
        total = format_cost(estimate_cost(steps))
        booking = (
            f"SlotNegotiator gets priority booking because battery < "
            f"{PRIORITY_BATTERY_THRESHOLD}% ($0.003)."
            if priority
            else "SlotNegotiator books a standard slot ($0.003)."
        )
        return OrchestratorPlan(
            trigger=f"Battery at {battery:g}% - CRITICAL: initiating autonomous charge sequence",
            reasoning=(
                "Speed-optimized for emergency: Weather ($0.001) + Pricing ($0.002) feed "
                "PathFinder, which integrates both data streams to compute the "
                f"energy-optimal route ($0.005). {booking} Total: {total}."
            ),
            steps=steps,
            estimated_cost=total,
            estimated_time="~8 seconds (PRIORITY)" if priority else "~12 seconds",
        )
