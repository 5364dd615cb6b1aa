"""SlotNegotiator: charging slot negotiation and reservation via A2A."""

import secrets
import string
from datetime import datetime, timedelta, timezone

from ..config import DEFAULT_DEVICE_ID
from ..models.device import coerce_number
from .base import MockServiceAgent

ARRIVAL_LEAD = timedelta(minutes=6)
DEFAULT_DURATION = 45
MAX_DURATION = 24 * 60  # minutes
_BASE36 = string.digits + string.ascii_uppercase


def _base36(number: int) -> str:
    digits = []
    while True:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
        if not number:
            return "".join(reversed(digits))


class SlotAgent(MockServiceAgent):
    agent_id = "slot-agent"
    agent_name = "SlotNegotiator"
    price = "0.003"
    latency_range = (0.25, 0.4)

    def __init__(self, latency_scale: float = 1.0, device_id: str = DEFAULT_DEVICE_ID):
        super().__init__(latency_scale)
        self._device_id = device_id

    def respond(self, request: dict) -> dict:
        station_id = request.get("stationId") or "gc7"
        duration = int(coerce_number(request.get("duration"), DEFAULT_DURATION))
        if not 1 <= duration <= MAX_DURATION:
            duration = DEFAULT_DURATION

        now = datetime.now(timezone.utc)
        start_time = now + ARRIVAL_LEAD
        end_time = start_time + timedelta(minutes=duration)

        return {
            "negotiation": {
                "protocol": "Google A2A",
                "counterparty": "GreenCharge Station Agent #7",
                "rounds": 2,
                "outcome": "accepted",
                "negotiatedDiscount": "5% off standard rate",
            },
            "booking": {
                "confirmationId": f"BK-{_base36(int(now.timestamp() * 1000))}",
                "stationId": station_id,
                "station": "GreenCharge Station #7",
                "bay": 3,
                "preferredTime": request.get("preferredTime"),
                "startTime": start_time.isoformat(),
                "endTime": end_time.isoformat(),
                "duration": f"{duration} min",
                "rate": "$0.114/kWh (5% negotiated discount)",
                "estimatedCost": "$4.10",
                "cancellationPolicy": "Free cancellation until arrival",
            },
            "authorization": {
                "type": "AP2 Intent Mandate",
                "maxAmount": "$5.00 USDC",
                "scope": "single_charge_session",
                "signedBy": self._device_id,
                "mandateHash": "0x" + secrets.token_hex(32),
            },
            "recommendation": (
                "Bay 3 secured at GreenCharge #7. Negotiated 5% discount via A2A. "
                "Pre-authorized via AP2 Intent Mandate (max $5.00). "
                "Free cancellation until arrival."
            ),
            "metadata": {
                "protocol": "x402 + A2A + AP2",
                "a2aVersion": "0.3.0",
                "ap2MandateType": "IntentMandate",
            },
        }
