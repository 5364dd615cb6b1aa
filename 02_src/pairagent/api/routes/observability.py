"""Observability API routes."""

from datetime import datetime

from pydantic import BaseModel, Field
from fastapi import APIRouter, HTTPException, Query

from ...app import IApplication
from ...models import LogType
from .control import require_runner


class LogEntryResponse(BaseModel):
    """Response model for a dashboard log entry."""

    id: str
    type: LogType
    agent_id: str | None = Field(default=None, serialization_alias="agentId")
    message: str
    tx_hash: str | None = Field(default=None, serialization_alias="txHash")
    timestamp: datetime
    icon: str


def create_observability_router(app: IApplication) -> APIRouter:
    """Create observability router."""
    router = APIRouter(prefix="/api/dashboard", tags=["observability"])

    @router.get(
        "/log",
        response_model=list[LogEntryResponse],
        response_model_by_alias=True,
    )
    async def get_log(
        limit: int = Query(100, ge=1, le=100),
        type: LogType | None = Query(None, description="Filter by entry type"),
        agent_id: str | None = Query(None, description="Filter by agent"),
    ) -> list[LogEntryResponse]:
        """Get dashboard log entries, newest first."""
        runner = require_runner()
        try:
            entries = [
                entry
                for entry in runner.state.log
                if (type is None or entry.type == type)
                and (agent_id is None or entry.agent_id == agent_id)
            ]
            return [
                LogEntryResponse(
                    id=entry.id,
                    type=entry.type,
                    agent_id=entry.agent_id,
                    message=entry.message,
                    tx_hash=entry.tx_hash,
                    timestamp=entry.timestamp,
                    icon=entry.icon,
                )
                for entry in entries[:limit]
            ]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
