"""Application bootstrap and lifecycle management."""

import os
from typing import Protocol, Sequence

from .agents import default_descriptors
from .config import resolve_db_path
from .discovery import IReceptionist, Receptionist
from .logging_config import get_logger
from .matching import IMatchingEngine, MatchingEngine
from .models import AgentDescriptor
from .registry import CapabilityRegistry
from .storage import AgentStore
from .tasks import ITaskManager, TaskManager
from .transport import A2AClient, IAgentTransport

logger = get_logger(__name__)


class IApplication(Protocol):
    """Bootstrap and lifecycle."""

    async def start(self) -> None:
        """Initialize components in dependency order."""
        ...

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        ...

    async def reset(self) -> None:
        """Reset data between test runs."""
        ...

    @property
    def registry(self) -> CapabilityRegistry:
        ...

    @property
    def task_manager(self) -> ITaskManager:
        ...

    @property
    def receptionist(self) -> IReceptionist:
        ...


class Application:
    """Main application bootstrap."""

    def __init__(
        self,
        db_path: str | None = None,
        descriptors: Sequence[AgentDescriptor] | None = None,
        transport: IAgentTransport | None = None,
    ):
        env_db_path = os.getenv("DATABASE_URL") if db_path is None else db_path
        self._db_path = resolve_db_path(env_db_path)
        self._descriptors = list(descriptors) if descriptors is not None else None
        self._injected_transport = transport

        # Components (will be initialized in start())
        self._store: AgentStore | None = None
        self._transport: IAgentTransport | None = None
        self._registry: CapabilityRegistry | None = None
        self._engine: IMatchingEngine | None = None
        self._task_manager: ITaskManager | None = None
        self._receptionist: IReceptionist | None = None

    async def start(self) -> None:
        """Initialize components in dependency order."""
        logger.info("Starting application")

        # 1. Agent store (no dependencies)
        self._store = AgentStore(self._db_path)
        await self._store.init()

        # 2. Transport (no internal dependencies)
        self._transport = self._injected_transport or A2AClient()
        logger.info("Transport initialized")

        # 3. Registry (depends on store)
        self._registry = CapabilityRegistry(self._store)
        descriptors = self._descriptors
        if descriptors is None:
            descriptors = default_descriptors()
        await self._registry.register_all(descriptors)
        logger.info("Registry initialized with %d agents", len(descriptors))

        # 4. Matching engine (reads candidates from the store)
        self._engine = MatchingEngine(self._store)

        # 5. Task manager (depends on registry + transport)
        self._task_manager = TaskManager(self._registry, self._transport)

        # 6. Receptionist (depends on engine, store, transport)
        self._receptionist = Receptionist(self._engine, self._store, self._transport)
        logger.info("All components initialized successfully")

    async def stop(self) -> None:
        """Shutdown in reverse order."""
        if self._registry:
            await self._registry.deregister_all()
            logger.info("Agents deregistered")
        if self._transport and self._injected_transport is None:
            await self._transport.aclose()
        if self._store:
            await self._store.close()
            logger.info("Agent store closed")
        self._store = None

    async def reset(self) -> None:
        """Reset data between test runs."""
        if not self._store or not self._registry:
            return

        await self._registry.deregister_all()
        await self._store.clear()
        logger.info("Agent store cleared")

        # Fresh tasks, same agents
        self._task_manager = TaskManager(self._registry, self._transport)
        descriptors = self._descriptors
        if descriptors is None:
            descriptors = default_descriptors()
        await self._registry.register_all(descriptors)
        logger.info("Reset complete")

    @property
    def store(self) -> AgentStore:
        """Get agent store instance."""
        if not self._store:
            raise RuntimeError("Application not started")
        return self._store

    @property
    def registry(self) -> CapabilityRegistry:
        if not self._registry:
            raise RuntimeError("Application not started")
        return self._registry

    @property
    def engine(self) -> IMatchingEngine:
        if not self._engine:
            raise RuntimeError("Application not started")
        return self._engine

    @property
    def task_manager(self) -> ITaskManager:
        """Get task manager instance."""
        if not self._task_manager:
            raise RuntimeError("Application not started")
        return self._task_manager

    @property
    def receptionist(self) -> IReceptionist:
        if not self._receptionist:
            raise RuntimeError("Application not started")
        return self._receptionist
