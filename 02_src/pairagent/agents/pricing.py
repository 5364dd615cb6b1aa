"""ChargePricer: charging station price comparison."""

from ..models.device import coerce_number
from .base import MockServiceAgent

MOCK_STATIONS = (
    {"id": "gc7", "name": "GreenCharge Station #7", "rate": 0.12, "unit": "$/kWh", "distance": "2.1km", "lat": 37.785, "lng": -122.409, "availability": "3/8 bays", "network": "GreenCharge", "rating": 4.8},
    {"id": "vh1", "name": "VoltHub Central", "rate": 0.15, "unit": "$/kWh", "distance": "3.4km", "lat": 37.779, "lng": -122.418, "availability": "1/4 bays", "network": "VoltHub", "rating": 4.5},
    {"id": "cp3", "name": "ChargePoint Plaza", "rate": 0.18, "unit": "$/kWh", "distance": "1.8km", "lat": 37.788, "lng": -122.401, "availability": "5/12 bays", "network": "ChargePoint", "rating": 4.7},
    {"id": "ev2", "name": "EVgo Market St", "rate": 0.22, "unit": "$/kWh", "distance": "0.9km", "lat": 37.791, "lng": -122.399, "availability": "0/6 bays", "network": "EVgo", "rating": 4.3},
    {"id": "ts1", "name": "Tesla Supercharger Embarcadero", "rate": 0.14, "unit": "$/kWh", "distance": "4.8km", "lat": 37.795, "lng": -122.393, "availability": "8/20 bays", "network": "Tesla", "rating": 4.9},
)


def free_bays(availability: str) -> int:
    """Free bay count from an "N/M bays" label; unparseable counts as zero."""
    head = availability.split("/", 1)[0].strip()
    return int(head) if head.isdigit() else 0


class PricingAgent(MockServiceAgent):
    agent_id = "pricing-agent"
    agent_name = "ChargePricer"
    price = "0.002"
    latency_range = (0.15, 0.25)

    def respond(self, request: dict) -> dict:
        radius = coerce_number(request.get("radius"), 8)
        battery_level = coerce_number(request.get("batteryLevel"), 20)

        available = [s for s in MOCK_STATIONS if free_bays(s["availability"]) > 0]
        ranked = sorted(available, key=lambda s: s["rate"])

        avg_rate = sum(s["rate"] for s in ranked) / len(ranked)
        best = ranked[0]
        savings = (avg_rate - best["rate"]) / avg_rate * 100

        query = {
            "radius": f"{radius:g}km",
            "batteryLevel": battery_level,
            "stationsScanned": len(MOCK_STATIONS),
            "available": len(available),
        }
        if isinstance(request.get("type"), str):
            query["type"] = request["type"]

        return {
            "query": query,
            "stations": [
                {
                    **station,
                    "priceRank": rank,
                    "savingsVsAvg": f"{(avg_rate - station['rate']) / avg_rate * 100:.0f}%",
                }
                for rank, station in enumerate(ranked, start=1)
            ],
            "recommendation": (
                f"{best['name']} - lowest rate at ${best['rate']}/kWh "
                f"({savings:.0f}% below area average)"
            ),
            "avgAreaRate": f"${avg_rate:.3f}/kWh",
            "metadata": {
                "dataSource": "PairAgent Pricing Oracle",
                "freshness": "real-time",
            },
        }
