"""Agent card derived from the registry contents."""

from typing import Sequence

from ..models import AgentCard, AgentRecord, SkillMeta
from ..models.protocol import AgentProvider, AgentSkill

DEFAULT_PROVIDER = AgentProvider(organization="A2A System", url="http://localhost:8080")


def _to_agent_skill(skill: SkillMeta) -> AgentSkill:
    return AgentSkill(
        id=skill.id,
        name=skill.name,
        description=skill.description,
        tags=list(skill.tags),
        examples=list(skill.examples) or None,
        input_modes=list(skill.input_modes) or None,
        output_modes=list(skill.output_modes) or None,
    )


def build_agent_card(agents: Sequence[AgentRecord]) -> AgentCard:
    """First agent's identity with the skills of every agent."""
    if not agents:
        return AgentCard(
            name="A2A Agent",
            version="1.0",
            description="A2A Protocol Agent",
            url="http://localhost:8080",
            provider=DEFAULT_PROVIDER,
        )

    primary = agents[0]
    return AgentCard(
        name=primary.name,
        version=primary.version,
        description=primary.description,
        url=primary.url,
        skills=[_to_agent_skill(skill) for agent in agents for skill in agent.skills],
        provider=DEFAULT_PROVIDER,
    )
