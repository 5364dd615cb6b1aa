"""Control API routes."""

from typing import Any

from pydantic import BaseModel
from fastapi import APIRouter, HTTPException

from ...app import IApplication
from ...registry import device_profile


class StatusResponse(BaseModel):
    """Response model for status."""

    status: str


# Global runner instance (will be set by main app)
_runner_instance: Any = None


def set_runner_instance(runner: Any) -> None:
    """Set the global sequence runner."""
    global _runner_instance
    _runner_instance = runner


def get_runner_instance() -> Any:
    """Get the global sequence runner."""
    return _runner_instance


def require_runner() -> Any:
    if _runner_instance is None:
        raise HTTPException(status_code=404, detail="Runner not configured")
    return _runner_instance


def create_control_router(app: IApplication) -> APIRouter:
    """Create control router."""
    router = APIRouter(prefix="/api/control", tags=["control"])

    @router.post("/sequence/start", response_model=StatusResponse)
    async def start_sequence() -> dict:
        """Start an autonomous hiring sequence in the background."""
        runner = require_runner()
        try:
            started = await runner.start()
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
        if not started:
            raise HTTPException(status_code=409, detail="Sequence already running")
        return {"status": "started"}

    @router.get("/state")
    async def get_state() -> dict:
        """Dashboard snapshot: battery, wallet, counters, agents and log."""
        runner = require_runner()
        snapshot = runner.state.snapshot()
        snapshot["running"] = runner.is_running
        snapshot["nextScenario"] = runner.next_scenario.value
        snapshot["deviceId"] = app.settings.device_id
        snapshot["device"] = device_profile(app.settings)
        return snapshot

    @router.post("/reset", response_model=StatusResponse)
    async def reset_state() -> dict:
        """Reset dashboard counters and log between demo runs."""
        runner = require_runner()
        if runner.is_running:
            raise HTTPException(status_code=409, detail="Sequence already running")
        try:
            runner.reset()
            return {"status": "ok"}
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    return router
