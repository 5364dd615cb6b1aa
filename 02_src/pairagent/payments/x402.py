"""x402 token helpers: base64-encoded JSON challenges and payments."""

import base64
import json
import secrets
from typing import Any

from ..config import CAIP2_NETWORK, USDC_CONTRACT
from ..models import AgentConfig

X402_VERSION = 1
PAYMENT_REQUIRED_HEADER = "PAYMENT-REQUIRED"
PAYMENT_HEADER = "X-PAYMENT"
PAYMENT_RESPONSE_HEADER = "X-PAYMENT-RESPONSE"


def encode_token(data: dict[str, Any]) -> str:
    """Encode a dict as a base64 JSON token."""
    return base64.b64encode(json.dumps(data).encode("utf-8")).decode("utf-8")


def decode_token(token: str) -> dict[str, Any]:
    """Decode a base64 JSON token. Raises ValueError."""
    try:
        data = json.loads(base64.b64decode(token, validate=True).decode("utf-8"))
    except Exception as e:
        raise ValueError(f"Invalid x402 token: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("Invalid x402 token: not an object")
    return data


def build_requirements(agent: AgentConfig, pay_to: str) -> dict[str, Any]:
    """Payment requirements for one call to an agent."""
    return {
        "scheme": "exact",
        "network": CAIP2_NETWORK,
        "asset": USDC_CONTRACT,
        "resource": agent.endpoint,
        "maxAmountRequired": agent.price_per_call,
        "payTo": pay_to,
        "description": f"{agent.name} ({agent.type})",
    }


def generate_tx_hash() -> str:
    """A random 32-byte hex hash standing in for a settlement tx."""
    return "0x" + secrets.token_hex(32)
