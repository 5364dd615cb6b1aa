"""Application bootstrap and lifecycle management."""

from typing import Protocol

from .agents import AgentLayer, IAgentLayer, create_default_layer
from .config import Settings
from .llm import ILLMProvider, LLMProvider
from .logging_config import get_logger
from .planning import LLMPlanner, PlanResolver, RuleBasedPlanner
from .registry import AgentRegistry

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    settings: Settings

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    @property
    def registry(self) -> AgentRegistry:
        ...

    @property
    def agent_layer(self) -> IAgentLayer:
        ...

    @property
    def planner(self) -> PlanResolver:
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        settings: Settings | None = None,
        llm_provider: ILLMProvider | None = None,
    ):
        self.settings = settings or Settings.from_env()

        # Components (will be initialized in start())
        self._registry: AgentRegistry | None = None
        self._agent_layer: AgentLayer | None = None
        self._llm: ILLMProvider | None = llm_provider
        self._planner: PlanResolver | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Registry (static)
        self._registry = AgentRegistry()

        # 2. Mock service agents
        self._agent_layer = create_default_layer(
            latency_scale=self.settings.agent_latency_scale,
            device_id=self.settings.device_id,
        )
        logger.info("Agent layer initialized: %s", ", ".join(self._agent_layer.agent_ids))

        # 3. LLM provider (optional)
        if self._llm is None and self.settings.anthropic_api_key:
            try:
                self._llm = LLMProvider(
                    api_key=self.settings.anthropic_api_key,
                    model=self.settings.llm_model,
                )
            except Exception as e:
                logger.warning("LLM provider unavailable: %s", e)

        # 4. Planner (depends on Registry, LLM)
        primary = LLMPlanner(self._llm, self._registry) if self._llm else None
        self._planner = PlanResolver(fallback=RuleBasedPlanner(), primary=primary)
        logger.info(
            "Planner initialized (%s)",
            "llm with rule-based fallback" if primary else "rule-based",
        )
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if isinstance(self._llm, LLMProvider):
            await self._llm.close()
        logger.info("Application stopped")

    @property
    def registry(self) -> AgentRegistry:
        """Get agent registry."""
        if self._registry is None:
            raise RuntimeError("Application not started")
        return self._registry

    @property
    def agent_layer(self) -> AgentLayer:
        """Get mock agent layer."""
        if self._agent_layer is None:
            raise RuntimeError("Application not started")
        return self._agent_layer

    @property
    def planner(self) -> PlanResolver:
        """Get plan resolver."""
        if self._planner is None:
            raise RuntimeError("Application not started")
        return self._planner
