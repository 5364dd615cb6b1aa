"""Orchestrator API route."""

from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

from ...app import IApplication
from ...logging_config import get_logger
from ...models import DeviceState
from ...planning import PlanDocument
from .body import read_json_body

logger = get_logger(__name__)

ORCHESTRATOR_NAME = "PairAgent EV Brain"


class PlanMetadata(BaseModel):
    """How the plan was produced."""

    model_config = ConfigDict(populate_by_name=True)

    planning_method: str = Field(alias="planningMethod")
    erc8004_agent_id: str = Field(alias="erc8004AgentId")
    encryption: str = "SKALE BITE"


class OrchestrateResponse(BaseModel):
    """Response model for an orchestration request."""

    model_config = ConfigDict(populate_by_name=True)

    orchestrator: str
    device_id: str = Field(alias="deviceId")
    plan: PlanDocument
    metadata: PlanMetadata


def create_orchestrate_router(app: IApplication) -> APIRouter:
    """Create orchestrate router."""
    router = APIRouter(prefix="/api", tags=["orchestrator"])

    @router.post(
        "/orchestrate",
        response_model=OrchestrateResponse,
        response_model_by_alias=True,
    )
    async def orchestrate(request: Request) -> dict:
        """Map a device state to an agent-hiring plan. Never fails."""
        state = DeviceState.from_payload(await read_json_body(request))
        resolved = await app.planner.resolve(state)

        logger.info(
            "Planned %s steps for scenario %s via %s",
            len(resolved.plan.steps),
            state.resolved_scenario.value,
            resolved.method,
            extra={
                "scenario": state.resolved_scenario.value,
                "planning_method": resolved.method,
            },
        )
        return {
            "orchestrator": ORCHESTRATOR_NAME,
            "deviceId": app.settings.device_id,
            "plan": resolved.plan.to_dict(),
            "metadata": {
                "planningMethod": resolved.method,
                "erc8004AgentId": app.settings.erc8004_agent_id,
                "encryption": "SKALE BITE",
            },
        }

    return router
