"""JSON skill documents persisted alongside each agent.

Format::

    {"agentName": "...", "skills": [{"id", "name", "description", "tags"}]}
"""

import json
from typing import Iterable

from ..errors import DeserializationError
from ..models import AgentSkillDocument, SkillMeta


def encode_skill_document(agent_name: str, skills: Iterable[SkillMeta]) -> str:
    """Serialize an agent's skills to the stored JSON document."""
    document = {
        "agentName": agent_name,
        "skills": [
            {
                "id": skill.id,
                "name": skill.name,
                "description": skill.description,
                "tags": list(skill.tags),
            }
            for skill in skills
        ],
    }
    return json.dumps(document)


def decode_skill_document(text: str | None) -> AgentSkillDocument:
    """Parse a stored JSON document. Raises DeserializationError."""
    if not text:
        raise DeserializationError("Empty skill document")

    try:
        raw = json.loads(text)
    except (json.JSONDecodeError, TypeError) as e:
        raise DeserializationError(f"Invalid skill document JSON: {e}") from e

    if not isinstance(raw, dict):
        raise DeserializationError("Skill document must be a JSON object")

    raw_skills = raw.get("skills") or []
    if not isinstance(raw_skills, list):
        raise DeserializationError("'skills' must be a list")

    skills = []
    for entry in raw_skills:
        if not isinstance(entry, dict) or not entry.get("id"):
            raise DeserializationError(f"Malformed skill entry: {entry!r}")
        tags = entry.get("tags") or []
        if not isinstance(tags, list):
            raise DeserializationError(f"Skill {entry['id']} has malformed tags")
        skills.append(
            SkillMeta(
                id=str(entry["id"]),
                name=str(entry.get("name") or ""),
                description=str(entry.get("description") or ""),
                tags=tuple(str(tag) for tag in tags),
            )
        )

    return AgentSkillDocument(
        agent_name=str(raw.get("agentName") or ""),
        skills=skills,
    )
