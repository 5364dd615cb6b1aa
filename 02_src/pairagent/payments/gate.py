"""x402 payment gate for the agent endpoints.

Disabled, the gate passes every request through. Enabled, an agent call
without an X-PAYMENT token gets a 402 with the payment requirements. Tokens
are decoded but signatures are not verified and nothing is settled.
"""

from typing import Awaitable, Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse

from ..config import CAIP2_NETWORK
from ..logging_config import get_logger
from ..registry import AgentRegistry
from .x402 import (
    PAYMENT_HEADER,
    PAYMENT_REQUIRED_HEADER,
    PAYMENT_RESPONSE_HEADER,
    X402_VERSION,
    build_requirements,
    decode_token,
    encode_token,
    generate_tx_hash,
)

logger = get_logger(__name__)

GATED_PREFIX = "/api/agents/"

CallNext = Callable[[Request], Awaitable[Response]]


class PaymentGate:
    """HTTP middleware guarding /api/agents/*."""

    def __init__(self, registry: AgentRegistry, pay_to: str, enforce: bool = False):
        self._registry = registry
        self._pay_to = pay_to
        self._enforce = enforce

    @property
    def enforce(self) -> bool:
        return self._enforce

    async def __call__(self, request: Request, call_next: CallNext) -> Response:
        if not self._enforce or not request.url.path.startswith(GATED_PREFIX):
            return await call_next(request)

        agent = self._registry.by_endpoint(request.url.path)
        if agent is None:
            return await call_next(request)

        requirements = build_requirements(agent, self._pay_to)
        token = request.headers.get(PAYMENT_HEADER)
        if not token:
            return self._payment_required(requirements, "Payment Required")

        try:
            payment = decode_token(token)
        except ValueError as e:
            logger.info("Rejected payment for %s: %s", agent.id, e)
            return self._payment_required(requirements, "Invalid payment token")

        response = await call_next(request)
        payer = (payment.get("payload") or {}).get("address")
        response.headers[PAYMENT_RESPONSE_HEADER] = encode_token(
            {
                "success": True,
                "txHash": generate_tx_hash(),
                "network": CAIP2_NETWORK,
                "payer": payer,
            }
        )
        logger.info("Accepted x402 payment from %s for %s", payer, agent.id)
        return response

    def _payment_required(self, requirements: dict, error: str) -> JSONResponse:
        accepts = [requirements]
        return JSONResponse(
            status_code=402,
            content={"x402Version": X402_VERSION, "error": error, "accepts": accepts},
            headers={PAYMENT_REQUIRED_HEADER: encode_token({"accepts": accepts})},
        )
