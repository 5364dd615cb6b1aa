"""Tests for x402 payment executors and the payment gate."""

import httpx
import pytest
import pytest_asyncio
from eth_account import Account
from eth_account.messages import encode_defunct

from conftest import TEST_ADDRESS, TEST_PRIVATE_KEY
from pairagent.api import create_fastapi_app
from pairagent.app import Application
from pairagent.config import CAIP2_NETWORK, Settings
from pairagent.payments import (
    MODE_ONCHAIN,
    MODE_SIMULATED,
    OnChainPaymentExecutor,
    PaymentError,
    SimulatedPaymentExecutor,
    create_payment_executor,
    decode_token,
    encode_token,
    generate_tx_hash,
)
from pairagent.payments.x402 import (
    PAYMENT_HEADER,
    PAYMENT_REQUIRED_HEADER,
    PAYMENT_RESPONSE_HEADER,
)

PAY_TO = "0x000000000000000000000000000000000000dEaD"


@pytest_asyncio.fixture
async def gated_client():
    """Client for an API that enforces x402 on the agent endpoints."""
    settings = Settings(
        enforce_payments=True,
        agent_services_wallet=PAY_TO,
        agent_latency_scale=0.0,
    )
    app = Application(settings)
    await app.start()
    transport = httpx.ASGITransport(app=create_fastapi_app(app))
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    await app.stop()


class TestTokens:
    """Tests for x402 token helpers."""

    def test_decode_inverts_encode(self):
        data = {"accepts": [{"maxAmountRequired": "0.002"}]}
        assert decode_token(encode_token(data)) == data

    @pytest.mark.parametrize("token", ["%%%", "bm90LWpzb24=", "WzFd"])
    def test_decode_rejects_garbage(self, token):
        # "not-json" and "[1]" decode as base64 but are not JSON objects
        with pytest.raises(ValueError):
            decode_token(token)

    def test_tx_hash_shape(self):
        tx_hash = generate_tx_hash()
        assert tx_hash.startswith("0x")
        assert len(tx_hash) == 66
        assert generate_tx_hash() != tx_hash


class TestPaymentGate:
    """Tests for the x402 gate middleware."""

    @pytest.mark.asyncio
    async def test_disabled_gate_passes_through(self, client):
        response = await client.post("/api/agents/pricing", json={})

        assert response.status_code == 200
        assert PAYMENT_RESPONSE_HEADER not in response.headers

    @pytest.mark.asyncio
    async def test_missing_payment_gets_402(self, gated_client):
        response = await gated_client.post("/api/agents/routing", json={})

        assert response.status_code == 402
        body = response.json()
        assert body["x402Version"] == 1
        requirement = body["accepts"][0]
        assert requirement["maxAmountRequired"] == "0.005"
        assert requirement["payTo"] == PAY_TO
        assert requirement["network"] == CAIP2_NETWORK
        assert requirement["resource"] == "/api/agents/routing"

        challenge = decode_token(response.headers[PAYMENT_REQUIRED_HEADER])
        assert challenge["accepts"] == body["accepts"]

    @pytest.mark.asyncio
    async def test_invalid_payment_gets_402(self, gated_client):
        response = await gated_client.post(
            "/api/agents/slot", json={}, headers={PAYMENT_HEADER: "not-a-token"}
        )

        assert response.status_code == 402
        assert response.json()["error"] == "Invalid payment token"

    @pytest.mark.asyncio
    async def test_valid_payment_is_settled(self, gated_client):
        token = encode_token({"payload": {"address": TEST_ADDRESS}})
        response = await gated_client.post(
            "/api/agents/weather", json={}, headers={PAYMENT_HEADER: token}
        )

        assert response.status_code == 200
        assert response.json()["agentId"] == "weather-agent"
        settlement = decode_token(response.headers[PAYMENT_RESPONSE_HEADER])
        assert settlement["success"] is True
        assert settlement["payer"] == TEST_ADDRESS

    @pytest.mark.asyncio
    async def test_non_agent_routes_are_not_gated(self, gated_client):
        assert (await gated_client.get("/api/agents")).status_code == 200
        assert (await gated_client.post("/api/orchestrate", json={})).status_code == 200


class TestSimulatedExecutor:
    """Tests for SimulatedPaymentExecutor."""

    @pytest.mark.asyncio
    async def test_call_fabricates_payment(self, client):
        executor = SimulatedPaymentExecutor()

        result = await executor.call(client, "/api/agents/pricing", {"radius": 8})

        assert executor.mode == MODE_SIMULATED
        assert result.data["agentId"] == "pricing-agent"
        assert result.payment.success is True
        assert result.payment.on_chain is False
        assert result.payment.amount == "0.002"
        assert result.payment.tx_hash.startswith("0x")
        assert "simulated" in result.payment.network

    @pytest.mark.asyncio
    async def test_call_raises_on_http_error(self, client):
        with pytest.raises(httpx.HTTPStatusError):
            await SimulatedPaymentExecutor().call(client, "/api/agents/nothing", {})

    @pytest.mark.asyncio
    async def test_call_is_refused_by_enforcing_gate(self, gated_client):
        with pytest.raises(httpx.HTTPStatusError):
            await SimulatedPaymentExecutor().call(gated_client, "/api/agents/pricing", {})


class TestOnChainExecutor:
    """Tests for OnChainPaymentExecutor."""

    def test_address_from_key(self):
        executor = OnChainPaymentExecutor(TEST_PRIVATE_KEY)

        assert executor.mode == MODE_ONCHAIN
        assert executor.address == TEST_ADDRESS

    def test_signature_recovers_device_address(self):
        executor = OnChainPaymentExecutor(TEST_PRIVATE_KEY)
        challenge = encode_token({"accepts": [{"maxAmountRequired": "0.001"}]})

        payment = decode_token(executor.sign_challenge(challenge))

        signer = Account.recover_message(
            encode_defunct(text=challenge), signature=payment["payload"]["signature"]
        )
        assert signer == TEST_ADDRESS
        assert payment["payload"]["challenge"] == challenge
        assert payment["network"] == CAIP2_NETWORK

    @pytest.mark.asyncio
    async def test_pays_after_402(self, gated_client):
        executor = OnChainPaymentExecutor(TEST_PRIVATE_KEY)

        result = await executor.call(gated_client, "/api/agents/slot", {"duration": 30})

        assert result.data["booking"]["duration"] == "30 min"
        assert result.payment.on_chain is True
        assert result.payment.amount == "0.003"
        assert result.payment.tx_hash.startswith("0x")

    @pytest.mark.asyncio
    async def test_ungated_call_is_not_on_chain(self, client):
        result = await OnChainPaymentExecutor(TEST_PRIVATE_KEY).call(
            client, "/api/agents/weather", {}
        )

        assert result.payment.on_chain is False
        assert result.payment.amount == "0.001"

    @pytest.mark.asyncio
    async def test_402_without_challenge(self):
        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(402, json={"error": "pay up"})

        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            with pytest.raises(PaymentError):
                await OnChainPaymentExecutor(TEST_PRIVATE_KEY).call(c, "/api/agents/slot", {})

    @pytest.mark.asyncio
    async def test_rejected_payment(self):
        challenge = encode_token({"accepts": [{"maxAmountRequired": "0.003"}]})

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(402, headers={PAYMENT_REQUIRED_HEADER: challenge})

        transport = httpx.MockTransport(handler)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            with pytest.raises(PaymentError, match="rejected"):
                await OnChainPaymentExecutor(TEST_PRIVATE_KEY).call(c, "/api/agents/slot", {})


class TestCreatePaymentExecutor:
    """Tests for executor selection."""

    def test_default_is_simulated(self):
        assert isinstance(create_payment_executor(Settings()), SimulatedPaymentExecutor)

    def test_onchain_with_key(self):
        settings = Settings(payment_mode=MODE_ONCHAIN, agent_private_key=TEST_PRIVATE_KEY)
        executor = create_payment_executor(settings)

        assert isinstance(executor, OnChainPaymentExecutor)
        assert executor.address == TEST_ADDRESS

    @pytest.mark.parametrize(
        "settings",
        [
            Settings(payment_mode=MODE_ONCHAIN),
            Settings(payment_mode=MODE_ONCHAIN, agent_private_key="0xnot-a-key"),
            Settings(payment_mode="barter"),
        ],
    )
    def test_falls_back_to_simulated(self, settings):
        assert isinstance(create_payment_executor(settings), SimulatedPaymentExecutor)
