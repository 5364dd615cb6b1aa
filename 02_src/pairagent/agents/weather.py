"""AtmoSense: hyperlocal weather and its battery impact."""

from ..models.device import DEFAULT_LAT, DEFAULT_LNG, coerce_number
from .base import MockServiceAgent


class WeatherAgent(MockServiceAgent):
    agent_id = "weather-agent"
    agent_name = "AtmoSense"
    price = "0.001"
    latency_range = (0.1, 0.2)

    def respond(self, request: dict) -> dict:
        lat = coerce_number(request.get("lat"), DEFAULT_LAT)
        lng = coerce_number(request.get("lng"), DEFAULT_LNG)

        return {
            "location": {"lat": lat, "lng": lng, "zone": "SF-Downtown-7"},
            "current": {
                "temperature": {"value": 72, "unit": "°F", "feels_like": 70},
                "humidity": 45,
                "wind": {"speed": 5, "direction": "NE", "unit": "mph"},
                "precipitation": {"probability": 0, "type": "none"},
                "visibility": "10+ miles",
                "uvIndex": 4,
                "airQuality": {"index": 42, "label": "Good"},
            },
            "batteryImpact": {
                "temperatureEffect": "+4% efficiency (optimal 65-75°F range)",
                "windEffect": "-0.3% (mild headwind on NE routes)",
                "netImpact": "+3.7% efficiency gain",
                "recommendation": "Optimal driving conditions. No weather-related concerns.",
            },
            "forecast": {
                "next1hr": "Clear, 71°F",
                "next3hr": "Clear, 68°F, wind increasing to 8mph",
                "next6hr": "Partly cloudy, 64°F",
                "precipitation6hr": "0%",
            },
            "recommendation": (
                "Clear skies. +4% battery efficiency from optimal temperature. "
                "No weather-related delays expected for the next 3 hours."
            ),
            "metadata": {
                "dataSource": "PairAgent Weather Intelligence Grid",
                "resolution": "500m hyperlocal",
            },
        }
