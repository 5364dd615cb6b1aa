"""Sequence runner: the simulated EV hiring agents one step at a time."""

import asyncio
import random
from typing import Protocol

import httpx

from pairagent.config import NETWORK_NAME
from pairagent.logging_config import get_logger
from pairagent.models import (
    AgentConfig,
    AgentStatus,
    LogType,
    OrchestratorPlan,
    OrchestratorStep,
    Scenario,
)
from pairagent.payments import (
    MODE_ONCHAIN,
    IPaymentExecutor,
    SimulatedPaymentExecutor,
    generate_tx_hash,
)
from pairagent.registry import AgentRegistry

from .state import DashboardState

logger = get_logger(__name__)

SCENARIOS = (Scenario.CHARGE, Scenario.MAINTENANCE, Scenario.FLEET)
DEVICE_LOCATION = {"lat": 37.785, "lng": -122.409}
FALLBACK_RESULT = {"recommendation": "Agent responded successfully (fallback)."}
DEFAULT_RESULT_MESSAGE = "Task completed successfully."


class ISequenceRunner(Protocol):
    """Drives orchestration plans against the HTTP API."""

    @property
    def is_running(self) -> bool:
        ...

    async def start(self) -> bool:
        """Start one sequence in the background. False if one is running."""
        ...

    async def run_sequence(self) -> OrchestratorPlan | None:
        """Obtain a plan for the next scenario and execute it."""
        ...


class SequenceRunner:
    """Walks plan steps strictly in order; never aborts on agent failure."""

    def __init__(
        self,
        api_url: str = "http://localhost:8000",
        executor: IPaymentExecutor | None = None,
        registry: AgentRegistry | None = None,
        state: DashboardState | None = None,
        client: httpx.AsyncClient | None = None,
        pace: float = 1.0,
    ):
        self._api_url = api_url
        self._executor = executor or SimulatedPaymentExecutor()
        self._registry = registry or AgentRegistry()
        self._state = state or DashboardState(agent.id for agent in self._registry.list())
        self._client = client
        self._owns_client = client is None
        self._pace = pace
        self._scenario_index = 0
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def state(self) -> DashboardState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._running or (self._task is not None and not self._task.done())

    @property
    def next_scenario(self) -> Scenario:
        return SCENARIOS[self._scenario_index % len(SCENARIOS)]

    async def start(self) -> bool:
        if self.is_running:
            return False
        self._task = asyncio.create_task(self.run_sequence())
        return True

    async def wait(self) -> None:
        """Wait for a background sequence, if any."""
        if self._task:
            await self._task

    async def aclose(self) -> None:
        """Let a running sequence finish, then release the HTTP client."""
        await self.wait()
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None

    def reset(self) -> None:
        self._state.reset()
        self._scenario_index = 0

    async def run_sequence(self) -> OrchestratorPlan | None:
        if self._running:
            return None
        self._running = True

        scenario = self.next_scenario
        live = self._executor.mode == MODE_ONCHAIN
        try:
            self._state.add_log(
                LogType.SYSTEM,
                f"Orchestrator analyzing device state... [Mode: {'LIVE x402' if live else 'Simulated'}]",
                "🧠",
            )
            await self._pause(1.0)

            plan = await self._fetch_plan(scenario)
            if plan:
                self._state.add_log(LogType.SYSTEM, plan.trigger, "🚨")
                self._state.add_log(
                    LogType.SYSTEM,
                    f"Plan: {len(plan.steps)} agents to hire | Est. cost: {plan.estimated_cost}",
                    "📋",
                )
                await self._pause(1.5)
                await self.execute_plan(plan)

            if scenario is Scenario.CHARGE:
                self._state.recharge(35 + random.randint(0, 19))

            settled = f"settled ON-CHAIN on {NETWORK_NAME}" if live else "simulated"
            self._state.add_log(
                LogType.SYSTEM,
                f"Autonomous sequence complete. All x402 payments {settled}.",
                "✅",
            )
            self._scenario_index += 1
            return plan
        finally:
            self._running = False

    async def execute_plan(self, plan: OrchestratorPlan) -> list[dict]:
        """Run every step in order. Returns each agent's payload."""
        results = []
        for step in plan.steps:
            agent = self._registry.get(step.agent_id)
            if agent is None:
                logger.warning("Skipping step for unknown agent %s", step.agent_id)
                continue
            results.append(await self.execute_step(step, agent))
        return results

    async def execute_step(self, step: OrchestratorStep, agent: AgentConfig) -> dict:
        state = self._state
        state.set_agent_status(agent.id, AgentStatus.ACTIVE)
        state.add_log(LogType.ACTION, step.action, "→", agent_id=agent.id)
        await self._pause(1.5, 2.5)

        tx_hash = generate_tx_hash()
        on_chain = False
        try:
            if self._executor.mode == MODE_ONCHAIN:
                state.add_log(
                    LogType.SYSTEM,
                    "Initiating x402 payment - signing with device key...",
                    "🔐",
                    agent_id=agent.id,
                )
            call = await self._executor.call(self._get_client(), agent.endpoint, step.params)
            result = call.data
            tx_hash = call.payment.tx_hash
            on_chain = call.payment.on_chain
        except Exception as e:
            logger.error("Agent call to %s failed: %s", agent.id, e, exc_info=True)
            state.add_log(
                LogType.ERROR,
                f"Payment/call failed: {e}. Using cached response.",
                "⚠️",
                agent_id=agent.id,
            )
            result = dict(FALLBACK_RESULT)

        price = agent.price
        state.add_log(
            LogType.PAYMENT,
            f"x402 Payment: ${price:.4f} USDC → {agent.name}"
            + (" ✅ ON-CHAIN" if on_chain else " (simulated)"),
            "💰",
            agent_id=agent.id,
            tx_hash=tx_hash,
        )
        state.record_payment(agent.id, price)
        logger.info(
            "Paid %s USDC to %s",
            price,
            agent.id,
            extra={
                "agent_id": agent.id,
                "tx_hash": tx_hash,
                "context": {"amount": str(price), "on_chain": on_chain},
            },
        )
        state.set_agent_status(agent.id, AgentStatus.RESPONDING)
        await self._pause(1.2)

        recommendation = result.get("recommendation")
        state.add_log(
            LogType.RESULT,
            recommendation if isinstance(recommendation, str) and recommendation else DEFAULT_RESULT_MESSAGE,
            "✓",
            agent_id=agent.id,
        )
        state.set_agent_status(agent.id, AgentStatus.IDLE)
        await self._pause(0.8)
        return result

    async def _fetch_plan(self, scenario: Scenario) -> OrchestratorPlan | None:
        try:
            response = await self._get_client().post(
                "/api/orchestrate",
                json={
                    "batteryLevel": self._state.battery,
                    "location": DEVICE_LOCATION,
                    "walletBalance": float(self._state.wallet_balance),
                    "scenario": scenario.value,
                },
            )
            response.raise_for_status()
            return OrchestratorPlan.from_dict(response.json()["plan"])
        except Exception as e:
            logger.error("Orchestrator request failed: %s", e)
            self._state.add_log(LogType.ERROR, f"Orchestrator unavailable: {e}", "⚠️")
            return None

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(base_url=self._api_url, timeout=10.0)
        return self._client

    async def _pause(self, low: float, high: float | None = None) -> None:
        seconds = low if high is None else random.uniform(low, high)
        await asyncio.sleep(seconds * self._pace)
