"""Device-related data models."""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

DEFAULT_BATTERY_LEVEL = 20.0
DEFAULT_LAT = 37.785
DEFAULT_LNG = -122.409


class Scenario(str, Enum):
    """Situational tags that select a plan template."""

    CHARGE = "charge"
    MAINTENANCE = "maintenance"
    FLEET = "fleet"

    @classmethod
    def parse(cls, value: Any) -> "Scenario":
        """Resolve a raw tag by exact match; anything else is a charge request."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value)
            except ValueError:
                pass
        return cls.CHARGE


def coerce_number(value: Any, default: float) -> float:
    # bool is an int subclass; a flag is not a reading
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return default
    try:
        number = float(value)
    except (ValueError, OverflowError):
        return default
    return number if math.isfinite(number) else default


@dataclass(frozen=True)
class Location:
    """A latitude/longitude pair."""

    lat: float = DEFAULT_LAT
    lng: float = DEFAULT_LNG

    @classmethod
    def from_payload(cls, payload: Any) -> "Location":
        if not isinstance(payload, dict):
            return cls()
        return cls(
            lat=coerce_number(payload.get("lat"), DEFAULT_LAT),
            lng=coerce_number(payload.get("lng"), DEFAULT_LNG),
        )


@dataclass(frozen=True)
class DeviceState:
    """Snapshot of the device used as planning input. Never persisted."""

    battery_level: float = DEFAULT_BATTERY_LEVEL
    location: Location = field(default_factory=Location)
    wallet_balance: float = 0.0
    schedule: str | None = None
    scenario: str | None = None  # raw tag as received

    def __post_init__(self):
        clamped = min(max(self.battery_level, 0.0), 100.0)
        object.__setattr__(self, "battery_level", clamped)

    @property
    def resolved_scenario(self) -> Scenario:
        return Scenario.parse(self.scenario)

    @classmethod
    def from_payload(cls, payload: Any) -> "DeviceState":
        """Build from a request body. Missing or invalid fields take defaults."""
        if not isinstance(payload, dict):
            payload = {}

        schedule = payload.get("schedule")
        scenario = payload.get("scenario")
        return cls(
            battery_level=coerce_number(payload.get("batteryLevel"), DEFAULT_BATTERY_LEVEL),
            location=Location.from_payload(payload.get("location")),
            wallet_balance=coerce_number(payload.get("walletBalance"), 0.0),
            schedule=schedule if isinstance(schedule, str) else None,
            scenario=scenario if isinstance(scenario, str) else None,
        )

    def describe(self) -> str:
        """One-line natural-language description for the LLM planner."""
        text = (
            f"Device state: Battery {self.battery_level:g}%, "
            f"location ({self.location.lat}, {self.location.lng}), "
            f"wallet {self.wallet_balance} USDC."
        )
        if self.schedule:
            text += f" Schedule: {self.schedule}."
        if self.scenario:
            text += f" Scenario: {self.scenario}"
        else:
            text += " Decide the best action."
        return text
