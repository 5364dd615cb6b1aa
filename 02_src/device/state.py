"""Dashboard state: wallet, counters, agent statuses and the activity log."""

import uuid
from collections import deque
from datetime import datetime, timezone
from decimal import Decimal
from typing import Iterable

from pairagent.logging_config import get_logger
from pairagent.models import AgentActivity, AgentStatus, LogEntry, LogType

logger = get_logger(__name__)

INITIAL_BATTERY = 23.0
INITIAL_WALLET_BALANCE = Decimal("1.2847")
MAX_BATTERY_AFTER_CHARGE = 98.0
LOG_CAPACITY = 100


class DashboardState:
    """All display state for one device, updated by a single runner."""

    def __init__(
        self,
        agent_ids: Iterable[str],
        battery: float = INITIAL_BATTERY,
        wallet_balance: Decimal = INITIAL_WALLET_BALANCE,
    ):
        self._agent_ids = tuple(agent_ids)
        self._initial_battery = battery
        self._initial_wallet = wallet_balance
        self.reset()

    def reset(self) -> None:
        self.battery = self._initial_battery
        self.wallet_balance = self._initial_wallet
        self.total_spent = Decimal(0)
        self.total_tx = 0
        self.agents = {agent_id: AgentActivity(agent_id) for agent_id in self._agent_ids}
        self._log: deque[LogEntry] = deque(maxlen=LOG_CAPACITY)

    @property
    def log(self) -> list[LogEntry]:
        """Log entries, newest first."""
        return list(self._log)

    def add_log(
        self,
        type: LogType,
        message: str,
        icon: str,
        agent_id: str | None = None,
        tx_hash: str | None = None,
    ) -> LogEntry:
        entry = LogEntry(
            id=str(uuid.uuid4()),
            type=type,
            message=message,
            icon=icon,
            timestamp=datetime.now(timezone.utc),
            agent_id=agent_id,
            tx_hash=tx_hash,
        )
        self._log.appendleft(entry)
        logger.debug("[%s] %s", type.value, message)
        return entry

    def set_agent_status(self, agent_id: str, status: AgentStatus) -> None:
        self._activity(agent_id).status = status

    def record_payment(self, agent_id: str, price: Decimal) -> None:
        """Charge one call to the wallet and count it."""
        self.wallet_balance -= price
        self.total_spent += price
        self.total_tx += 1
        self._activity(agent_id).calls += 1

    def recharge(self, amount: float) -> None:
        self.battery = min(self.battery + amount, MAX_BATTERY_AFTER_CHARGE)

    def snapshot(self) -> dict:
        return {
            "battery": self.battery,
            "walletBalance": f"{self.wallet_balance:.4f}",
            "totalSpent": f"{self.total_spent:.4f}",
            "totalTx": self.total_tx,
            "agents": {
                agent_id: {"calls": activity.calls, "status": activity.status.value}
                for agent_id, activity in self.agents.items()
            },
            "log": [entry.to_dict() for entry in self._log],
        }

    def _activity(self, agent_id: str) -> AgentActivity:
        if agent_id not in self.agents:
            self.agents[agent_id] = AgentActivity(agent_id)
        return self.agents[agent_id]
