"""Mock service agent routes."""

from fastapi import APIRouter, Request
from pydantic import BaseModel, Field

from ...app import IApplication
from ...registry import AGENT_REGISTRY
from .body import read_json_body


class AgentResponse(BaseModel):
    """Registry entry as listed by GET /api/agents."""

    id: str
    name: str
    type: str
    icon: str
    description: str
    price_per_call: str = Field(serialization_alias="pricePerCall")
    endpoint: str
    latency: str
    reputation: float
    color: str
    capabilities: list[str]


def create_agents_router(app: IApplication) -> APIRouter:
    """Create agents router: registry listing plus one POST per agent."""
    router = APIRouter(prefix="/api/agents", tags=["agents"])

    @router.get("", response_model=list[AgentResponse], response_model_by_alias=True)
    async def list_agents() -> list[AgentResponse]:
        """List hireable agents."""
        return [
            AgentResponse(
                id=agent.id,
                name=agent.name,
                type=agent.type,
                icon=agent.icon,
                description=agent.description,
                price_per_call=agent.price_per_call,
                endpoint=agent.endpoint,
                latency=agent.latency,
                reputation=agent.reputation,
                color=agent.color,
                capabilities=list(agent.capabilities),
            )
            for agent in app.registry.list()
        ]

    def add_agent_route(agent_id: str, path: str) -> None:
        async def call_agent(request: Request) -> dict:
            body = await read_json_body(request)
            return await app.agent_layer.get(agent_id).handle(body)

        call_agent.__doc__ = f"Call {agent_id}."
        router.add_api_route(
            path,
            call_agent,
            methods=["POST"],
            name=agent_id,
        )

    for agent in AGENT_REGISTRY:
        add_agent_route(agent.id, agent.endpoint.removeprefix(router.prefix))

    return router
