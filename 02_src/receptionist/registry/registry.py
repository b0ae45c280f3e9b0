"""Capability registry: in-memory agent map mirrored to the agent store."""

import asyncio
from datetime import datetime, timezone
from typing import Iterable, Protocol, Sequence

from ..logging_config import get_logger
from ..models import AgentDescriptor, AgentRecord, SkillMeta, StoredAgent
from ..storage import IAgentStore
from .documents import encode_skill_document

logger = get_logger(__name__)


class ICapabilityRegistry(Protocol):
    """Holds agent and skill metadata for dispatch and discovery."""

    async def register(
        self,
        name: str,
        version: str,
        description: str,
        url: str,
        skills: Sequence[SkillMeta],
    ) -> AgentRecord:
        """Insert or replace an agent and persist it."""
        ...

    async def deregister(self, name: str) -> None:
        """Remove an agent from memory and the store. Idempotent."""
        ...

    def lookup(self, name: str) -> AgentRecord | None:
        """Get a registered agent by name."""
        ...

    def all(self) -> list[AgentRecord]:
        """All registered agents in registration order."""
        ...

    def find_skill(self, skill_id: str | None) -> tuple[AgentRecord, SkillMeta] | None:
        """First (agent, skill) advertising skill_id, by iteration order."""
        ...


class CapabilityRegistry:
    """In-memory registry of agents, mirrored to an IAgentStore."""

    def __init__(self, store: IAgentStore):
        self._store = store
        self._agents: dict[str, AgentRecord] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def _lock_for(self, name: str) -> asyncio.Lock:
        return self._locks.setdefault(name, asyncio.Lock())

    async def register(
        self,
        name: str,
        version: str,
        description: str,
        url: str,
        skills: Sequence[SkillMeta],
    ) -> AgentRecord:
        """Insert or replace an agent. Keeps the original registered_at.

        Raises PersistenceError if the store write fails; the in-memory
        entry is left untouched in that case.
        """
        async with self._lock_for(name):
            now = datetime.now(timezone.utc)
            registered_at = now

            prior = self._agents.get(name)
            if prior is not None:
                registered_at = prior.registered_at
            else:
                stored = await self._store.find(name)
                if stored is not None:
                    registered_at = stored.registered_at

            record = AgentRecord(
                name=name,
                version=version,
                description=description,
                url=url,
                registered_at=registered_at,
                last_heartbeat=now,
                active=True,
                skills=tuple(skills),
            )

            document = encode_skill_document(name, record.skills)
            await self._store.save(
                StoredAgent(
                    name=name,
                    version=version,
                    description=description,
                    url=url,
                    skill=document,
                    registered_at=registered_at,
                    last_heartbeat=now,
                    active=True,
                )
            )
            self._agents[name] = record

        logger.info("Registered agent: %s with %d skills", name, len(record.skills))
        logger.debug("Agent metadata: %s", document)
        return record

    async def register_descriptor(self, descriptor: AgentDescriptor) -> AgentRecord:
        return await self.register(
            descriptor.name,
            descriptor.version,
            descriptor.description,
            descriptor.url,
            descriptor.skills,
        )

    async def register_all(self, descriptors: Iterable[AgentDescriptor]) -> list[AgentRecord]:
        """Register descriptors in order."""
        return [await self.register_descriptor(d) for d in descriptors]

    async def deregister(self, name: str) -> None:
        """Remove an agent from memory and the store. Idempotent."""
        async with self._lock_for(name):
            self._agents.pop(name, None)
            await self._store.delete_by_name(name)
        logger.info("Deregistered agent: %s", name)

    async def deregister_all(self) -> None:
        """Deregister every agent this registry holds."""
        for name in list(self._agents):
            await self.deregister(name)

    def lookup(self, name: str) -> AgentRecord | None:
        return self._agents.get(name)

    def all(self) -> list[AgentRecord]:
        return list(self._agents.values())

    def find_skill(self, skill_id: str | None) -> tuple[AgentRecord, SkillMeta] | None:
        if skill_id is None:
            return None
        for agent in self._agents.values():
            for skill in agent.skills:
                if skill.id == skill_id:
                    return agent, skill
        return None
