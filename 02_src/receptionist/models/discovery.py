"""Wire models of the capability discovery surface."""

from typing import Any

from pydantic import Field

from ..config import DEFAULT_MAX_RESULTS
from .agents import AgentSkillDocument, SkillMeta
from .matching import SkillQuery
from .protocol import A2AModel, Message


class CapabilityQuery(A2AModel):
    """Capability query as received from callers."""

    skill_id: str | None = None
    required_tags: list[str] | None = None
    keywords: list[str] | None = None
    max_results: int | None = Field(default=None, ge=1)
    match_all_tags: bool | None = None

    def to_skill_query(self) -> SkillQuery:
        return SkillQuery(
            skill_id=self.skill_id,
            required_tags=tuple(self.required_tags or ()),
            keywords=tuple(self.keywords or ()),
            match_all_tags=bool(self.match_all_tags),
            max_results=self.max_results or DEFAULT_MAX_RESULTS,
        )


class SkillEntry(A2AModel):
    """One skill inside a skill document."""

    id: str
    name: str
    description: str = ""
    tags: list[str] = Field(default_factory=list)

    @classmethod
    def from_skill(cls, skill: SkillMeta) -> "SkillEntry":
        return cls(
            id=skill.id,
            name=skill.name,
            description=skill.description,
            tags=list(skill.tags),
        )


class AgentSkillDocumentView(A2AModel):
    agent_name: str
    url: str | None = None
    confidence: float | None = None
    skills: list[SkillEntry] = Field(default_factory=list)

    @classmethod
    def from_document(cls, document: AgentSkillDocument) -> "AgentSkillDocumentView":
        return cls(
            agent_name=document.agent_name,
            url=document.url,
            confidence=document.confidence,
            skills=[SkillEntry.from_skill(skill) for skill in document.skills],
        )


class CapabilityDiscoveryResponse(A2AModel):
    success: bool
    agent_count: int | None = None
    agents: list[AgentSkillDocumentView] | None = None
    error_message: str | None = None


class BestAgentResponse(A2AModel):
    success: bool
    agent: AgentSkillDocumentView | None = None
    error_message: str | None = None


class SkillInvocationRequest(A2AModel):
    agent_name: str
    skill_id: str | None = None
    input: list[str] | None = None
    metadata: dict[str, Any] | None = None
    context_id: str | None = None


class SkillInvocationResponse(A2AModel):
    success: bool
    result: Message | None = None
    task_id: str | None = None
    error_message: str | None = None
