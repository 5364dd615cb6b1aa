"""Pytest configuration and fixtures."""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, Mock

import httpx
import pytest
import pytest_asyncio

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

# Anvil's first well-known dev key
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


@pytest.fixture
def settings():
    """Settings with no artificial latency and no LLM."""
    from pairagent.config import Settings

    return Settings(agent_latency_scale=0.0, runner_pace=0.0)


@pytest.fixture
def mock_llm():
    """Create mock LLM provider."""
    llm = Mock()
    llm.complete = AsyncMock(return_value="{}")
    return llm


@pytest_asyncio.fixture
async def application(settings):
    """Started Application."""
    from pairagent.app import Application

    app = Application(settings)
    await app.start()
    yield app
    await app.stop()


@pytest.fixture
def fastapi_app(application):
    """FastAPI app around the started Application."""
    from pairagent.api import create_fastapi_app

    return create_fastapi_app(application)


@pytest_asyncio.fixture
async def client(fastapi_app):
    """In-process HTTP client for the API."""
    transport = httpx.ASGITransport(app=fastapi_app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest_asyncio.fixture
async def runner(client):
    """SequenceRunner wired to the in-process API and the control routes."""
    from device import SequenceRunner
    from pairagent.api.routes import control

    sr = SequenceRunner(client=client, pace=0.0)
    control.set_runner_instance(sr)
    yield sr
    await sr.aclose()
    control.set_runner_instance(None)
