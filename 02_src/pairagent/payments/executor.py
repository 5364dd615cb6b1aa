"""Payment executors: how the device pays for one agent call."""

import time
from typing import Any, Protocol

import httpx
from eth_account import Account
from eth_account.messages import encode_defunct

from ..config import CAIP2_NETWORK, NETWORK_NAME, Settings
from ..logging_config import get_logger
from ..models import AgentCallResult, PaymentResult
from .x402 import (
    PAYMENT_HEADER,
    PAYMENT_REQUIRED_HEADER,
    PAYMENT_RESPONSE_HEADER,
    X402_VERSION,
    decode_token,
    encode_token,
    generate_tx_hash,
)

logger = get_logger(__name__)

MODE_SIMULATED = "simulated"
MODE_ONCHAIN = "onchain"


class PaymentError(Exception):
    """The agent demanded a payment the executor could not make."""


class IPaymentExecutor(Protocol):
    """Calls an agent endpoint and pays for it."""

    @property
    def mode(self) -> str:
        """MODE_SIMULATED or MODE_ONCHAIN."""
        ...

    async def call(
        self, client: httpx.AsyncClient, endpoint: str, params: dict[str, Any]
    ) -> AgentCallResult:
        """POST params to endpoint. Raises on transport or payment failure."""
        ...


def _payload(response: httpx.Response) -> dict:
    response.raise_for_status()
    data = response.json()
    if not isinstance(data, dict):
        raise ValueError(f"Unexpected agent payload: {type(data).__name__}")
    return data


class SimulatedPaymentExecutor:
    """Calls the endpoint unpaid and fabricates the payment record."""

    @property
    def mode(self) -> str:
        return MODE_SIMULATED

    async def call(
        self, client: httpx.AsyncClient, endpoint: str, params: dict[str, Any]
    ) -> AgentCallResult:
        started = time.monotonic()
        response = await client.post(endpoint, json={**params, "_simulate": True})
        data = _payload(response)

        return AgentCallResult(
            data=data,
            payment=PaymentResult(
                success=True,
                tx_hash=generate_tx_hash(),
                amount=str(data.get("_price", "0")),
                network=f"{NETWORK_NAME} (simulated)",
                on_chain=False,
                timestamp=time.time(),
            ),
            latency=time.monotonic() - started,
        )


class OnChainPaymentExecutor:
    """x402 client flow: on 402, sign the challenge and retry once."""

    def __init__(self, private_key: str):
        self._account = Account.from_key(private_key)

    @property
    def mode(self) -> str:
        return MODE_ONCHAIN

    @property
    def address(self) -> str:
        return self._account.address

    def sign_challenge(self, challenge: str) -> str:
        """Build the X-PAYMENT token for a PAYMENT-REQUIRED challenge."""
        signed = self._account.sign_message(encode_defunct(text=challenge))
        return encode_token(
            {
                "x402Version": X402_VERSION,
                "scheme": "exact",
                "network": CAIP2_NETWORK,
                "payload": {
                    "challenge": challenge,
                    "signature": "0x" + bytes(signed.signature).hex(),
                    "address": self._account.address,
                },
            }
        )

    async def call(
        self, client: httpx.AsyncClient, endpoint: str, params: dict[str, Any]
    ) -> AgentCallResult:
        started = time.monotonic()
        response = await client.post(endpoint, json=params)
        amount = None

        if response.status_code == 402:
            challenge = response.headers.get(PAYMENT_REQUIRED_HEADER)
            if not challenge:
                raise PaymentError(f"402 from {endpoint} without {PAYMENT_REQUIRED_HEADER}")

            accepts = decode_token(challenge).get("accepts") or [{}]
            amount = accepts[0].get("maxAmountRequired")
            logger.info("Paying %s USDC for %s", amount, endpoint)

            response = await client.post(
                endpoint,
                json=params,
                headers={PAYMENT_HEADER: self.sign_challenge(challenge)},
            )
            if response.status_code == 402:
                raise PaymentError(f"Payment to {endpoint} was rejected")

        data = _payload(response)

        tx_hash = None
        settlement_header = response.headers.get(PAYMENT_RESPONSE_HEADER)
        if settlement_header:
            try:
                tx_hash = decode_token(settlement_header).get("txHash")
            except ValueError as e:
                logger.warning("Unreadable settlement header from %s: %s", endpoint, e)

        return AgentCallResult(
            data=data,
            payment=PaymentResult(
                success=True,
                tx_hash=tx_hash or generate_tx_hash(),
                amount=str(amount or data.get("_price", "0")),
                network=NETWORK_NAME,
                on_chain=tx_hash is not None,
                timestamp=time.time(),
            ),
            latency=time.monotonic() - started,
        )


def create_payment_executor(settings: Settings) -> IPaymentExecutor:
    """Pick the executor variant from settings. Never fails."""
    if settings.payment_mode == MODE_ONCHAIN:
        if not settings.agent_private_key:
            logger.warning("PAYMENT_MODE=onchain without AGENT_PRIVATE_KEY, simulating")
            return SimulatedPaymentExecutor()
        try:
            return OnChainPaymentExecutor(settings.agent_private_key)
        except Exception as e:
            logger.warning("Invalid AGENT_PRIVATE_KEY (%s), simulating", e)
            return SimulatedPaymentExecutor()

    if settings.payment_mode != MODE_SIMULATED:
        logger.warning("Unknown PAYMENT_MODE %r, simulating", settings.payment_mode)
    return SimulatedPaymentExecutor()
