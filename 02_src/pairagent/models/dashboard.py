"""Dashboard log data models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class LogType(str, Enum):
    """Categories of dashboard log entries."""

    SYSTEM = "system"
    ACTION = "action"
    PAYMENT = "payment"
    RESULT = "result"
    ERROR = "error"


@dataclass(frozen=True)
class LogEntry:
    """A single line in the dashboard activity log."""

    id: str
    type: LogType
    message: str
    icon: str
    timestamp: datetime
    agent_id: str | None = None
    tx_hash: str | None = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type.value,
            "agentId": self.agent_id,
            "message": self.message,
            "txHash": self.tx_hash,
            "timestamp": self.timestamp.isoformat(),
            "icon": self.icon,
        }
