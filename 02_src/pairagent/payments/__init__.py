"""x402 payments module."""

from .executor import (
    MODE_ONCHAIN,
    MODE_SIMULATED,
    IPaymentExecutor,
    OnChainPaymentExecutor,
    PaymentError,
    SimulatedPaymentExecutor,
    create_payment_executor,
)
from .gate import PaymentGate
from .x402 import decode_token, encode_token, generate_tx_hash

__all__ = [
    "MODE_ONCHAIN",
    "MODE_SIMULATED",
    "IPaymentExecutor",
    "OnChainPaymentExecutor",
    "SimulatedPaymentExecutor",
    "PaymentError",
    "create_payment_executor",
    "PaymentGate",
    "decode_token",
    "encode_token",
    "generate_tx_hash",
]
