"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..app import Application
from ..payments import PaymentGate
from ..registry import AgentRegistry
from .routes import agents, control, observability, orchestrate


# Global application instance
_app: Application | None = None


def get_app() -> Application:
    """Get the global application instance."""
    global _app
    if not _app:
        _app = Application()
    return _app


def create_fastapi_app(application: Application | None = None) -> FastAPI:
    """Create and configure FastAPI application."""
    application = application or get_app()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        """Manage application lifespan."""
        await application.start()
        yield
        runner = control.get_runner_instance()
        if runner is not None:
            await runner.aclose()
        await application.stop()

    fastapi_app = FastAPI(
        title="PairAgent API",
        description="Autonomous EV agent-hiring demo with x402 micropayments",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Enable CORS
    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["PAYMENT-REQUIRED", "X-PAYMENT-RESPONSE"],
    )

    # x402 gate over /api/agents/*
    gate = PaymentGate(
        registry=AgentRegistry(),
        pay_to=application.settings.agent_services_wallet,
        enforce=application.settings.enforce_payments,
    )
    fastapi_app.middleware("http")(gate)

    # Include routers
    fastapi_app.include_router(agents.create_agents_router(application))
    fastapi_app.include_router(orchestrate.create_orchestrate_router(application))
    fastapi_app.include_router(control.create_control_router(application))
    fastapi_app.include_router(observability.create_observability_router(application))

    return fastapi_app
