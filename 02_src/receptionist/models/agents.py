"""Agent and skill data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Awaitable, Callable, Protocol


class ISkillHandler(Protocol):
    """Capability bound to a skill: invoked with the message text."""

    def invoke(self, text: str) -> Any | Awaitable[Any]:
        """Run the skill. May return a value or an awaitable."""
        ...


@dataclass(frozen=True)
class CallableSkillHandler:
    """Adapts a plain (sync or async) function to ISkillHandler."""

    func: Callable[[str], Any]

    def invoke(self, text: str) -> Any | Awaitable[Any]:
        return self.func(text)


@dataclass(frozen=True)
class SkillMeta:
    """A single capability advertised by an agent."""

    id: str
    name: str
    description: str = ""
    tags: tuple[str, ...] = ()
    examples: tuple[str, ...] = ()
    input_modes: tuple[str, ...] = ("text/plain",)
    output_modes: tuple[str, ...] = ("text/plain",)
    # None means the skill is served remotely at the owning agent's URL
    handler: ISkillHandler | None = field(default=None, compare=False, repr=False)


@dataclass
class AgentDescriptor:
    """Explicit registration unit supplied by the embedding application."""

    name: str
    version: str
    description: str
    url: str
    skills: list[SkillMeta] = field(default_factory=list)


@dataclass
class AgentRecord:
    """Registry entry for a registered agent."""

    name: str
    version: str
    description: str
    url: str
    registered_at: datetime
    last_heartbeat: datetime
    active: bool = True
    skills: tuple[SkillMeta, ...] = ()


@dataclass
class StoredAgent:
    """Agent row as persisted by the agent store."""

    name: str
    version: str
    description: str
    url: str
    skill: str  # JSON skill document
    registered_at: datetime
    last_heartbeat: datetime
    active: bool = True
    id: int | None = None


@dataclass(frozen=True)
class AgentFilter:
    """Store-side search filter. Empty filter means all active agents."""

    skill_id: str | None = None


@dataclass
class AgentSkillDocument:
    """Decoded skill document of one agent, as returned by discovery."""

    agent_name: str
    skills: list[SkillMeta]
    url: str | None = None
    confidence: float | None = None
