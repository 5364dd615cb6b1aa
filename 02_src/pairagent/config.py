"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

LOGS_DIR.mkdir(parents=True, exist_ok=True)

# SKALE Base Sepolia: gasless, EIP-3009 USDC
NETWORK_NAME = "SKALE Base Sepolia"
CHAIN_ID = 324705682
CAIP2_NETWORK = f"eip155:{CHAIN_ID}"
USDC_CONTRACT = "0x2e08028E3C4c2356572E096d8EF835cD5C6030bD"

DEFAULT_RECEIVING_WALLET = "0xYOUR_RECEIVING_WALLET_ADDRESS"
DEFAULT_DEVICE_ID = "PP-EV-X402-DEMO"
DEFAULT_ERC8004_AGENT_ID = "8004"
DEFAULT_LLM_MODEL = "claude-3-5-sonnet-20241022"


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass
class Settings:
    """Runtime settings. Every field has a fallback literal."""

    api_host: str = "localhost"
    api_port: int = 8000
    base_url: str | None = None
    agent_services_wallet: str = DEFAULT_RECEIVING_WALLET
    device_id: str = DEFAULT_DEVICE_ID
    erc8004_agent_id: str = DEFAULT_ERC8004_AGENT_ID
    anthropic_api_key: str | None = None
    llm_model: str = DEFAULT_LLM_MODEL
    payment_mode: str = "simulated"  # "simulated" or "onchain"
    agent_private_key: str | None = None
    enforce_payments: bool = False
    agent_latency_scale: float = 1.0
    runner_pace: float = 1.0
    log_level: str = "INFO"

    @property
    def api_url(self) -> str:
        """Base URL the device runner uses to reach the API."""
        return self.base_url or f"http://{self.api_host}:{self.api_port}"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        try:
            api_port = int(os.getenv("API_PORT", "8000"))
        except ValueError:
            api_port = 8000

        return cls(
            api_host=os.getenv("API_HOST", "localhost"),
            api_port=api_port,
            base_url=os.getenv("BASE_URL") or None,
            agent_services_wallet=os.getenv("AGENT_SERVICES_WALLET")
            or DEFAULT_RECEIVING_WALLET,
            device_id=os.getenv("PAIRPOINT_DEVICE_ID") or DEFAULT_DEVICE_ID,
            erc8004_agent_id=os.getenv("ERC8004_AGENT_ID") or DEFAULT_ERC8004_AGENT_ID,
            anthropic_api_key=os.getenv("ANTHROPIC_API_KEY") or None,
            llm_model=os.getenv("LLM_MODEL") or DEFAULT_LLM_MODEL,
            payment_mode=(os.getenv("PAYMENT_MODE") or "simulated").strip().lower(),
            agent_private_key=os.getenv("AGENT_PRIVATE_KEY") or None,
            enforce_payments=_env_flag("X402_ENFORCE"),
            agent_latency_scale=_env_float("AGENT_LATENCY_SCALE", 1.0),
            runner_pace=_env_float("RUNNER_PACE", 1.0),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
