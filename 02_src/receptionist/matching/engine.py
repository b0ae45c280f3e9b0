"""Skill-matching engine: ranks stored agents and skills against a query."""

from typing import Protocol

from ..config import MIN_CONFIDENCE
from ..errors import DeserializationError
from ..logging_config import get_logger
from ..models import AgentFilter, AgentSkillDocument, MatchResult, SkillQuery, StoredAgent
from ..registry.documents import decode_skill_document
from ..storage import IAgentStore
from .scorer import score_skill

logger = get_logger(__name__)


class IMatchingEngine(Protocol):
    """Ranks registered skills and agents against capability queries."""

    async def match(self, query: SkillQuery) -> list[MatchResult]:
        """Per-skill matches, best first, at most query.max_results."""
        ...

    async def find_agents(self, query: SkillQuery) -> list[AgentSkillDocument]:
        """Per-agent matches with aggregated confidence, best first."""
        ...

    async def find_best_agent(self, query: SkillQuery) -> AgentSkillDocument | None:
        """Top find_agents entry, or None."""
        ...

    async def discover_all(self) -> list[AgentSkillDocument]:
        """Every active agent's skill document, unscored."""
        ...


def aggregate_confidence(confidences: list[float]) -> float:
    """Per-agent confidence from the confidences of its matched skills."""
    if not confidences:
        return 0.0
    best = max(confidences)
    average = sum(confidences) / len(confidences)
    combined = best * 0.7 + average * 0.3
    if len(confidences) > 1:
        combined = min(1.0, combined * 1.1)
    return combined


class MatchingEngine:
    """Scores candidate agents read from the agent store."""

    def __init__(self, store: IAgentStore):
        self._store = store

    async def _candidates(self, query: SkillQuery) -> list[StoredAgent]:
        # Only an exact id narrows in the store; loose queries scan everything
        if query.has_exact_criteria:
            return await self._store.search(AgentFilter(skill_id=query.skill_id))
        return await self._store.search(AgentFilter())

    async def _decoded(self, query: SkillQuery) -> list[tuple[StoredAgent, AgentSkillDocument]]:
        decoded = []
        for record in await self._candidates(query):
            try:
                document = decode_skill_document(record.skill)
            except DeserializationError as e:
                logger.warning("Skill JSON parsing failed for %s: %s", record.name, e.message)
                continue
            document.agent_name = record.name
            document.url = record.url
            decoded.append((record, document))
        logger.info("Evaluating %d agents for query: %s", len(decoded), query)
        return decoded

    async def match(self, query: SkillQuery) -> list[MatchResult]:
        results: list[MatchResult] = []
        for _, document in await self._decoded(query):
            for skill in document.skills:
                result = score_skill(skill, query, document.agent_name)
                if result.confidence > MIN_CONFIDENCE:
                    results.append(result)

        # sorted() is stable, so ties keep registration order
        results = sorted(results, key=lambda r: r.confidence, reverse=True)
        results = results[: query.max_results]

        logger.info("Found %d skills matching query", len(results))
        return results

    async def find_agents(self, query: SkillQuery) -> list[AgentSkillDocument]:
        matching: list[AgentSkillDocument] = []
        for record, document in await self._decoded(query):
            confidences = [
                result.confidence
                for result in (score_skill(s, query, record.name) for s in document.skills)
                if result.confidence > MIN_CONFIDENCE
            ]
            if not confidences:
                continue

            document.confidence = aggregate_confidence(confidences)
            matching.append(document)
            logger.debug(
                "Agent %s matched with confidence %s: %d skills matched",
                record.name,
                document.confidence,
                len(confidences),
            )

        matching = sorted(matching, key=lambda d: d.confidence, reverse=True)
        matching = matching[: query.max_results]

        logger.info(
            "Found %d agents matching query with confidence >= %s",
            len(matching),
            MIN_CONFIDENCE,
        )
        if matching:
            logger.info(
                "Top match: %s with confidence %s",
                matching[0].agent_name,
                matching[0].confidence,
            )
        return matching

    async def find_best_agent(self, query: SkillQuery) -> AgentSkillDocument | None:
        agents = await self.find_agents(query)
        return agents[0] if agents else None

    async def discover_all(self) -> list[AgentSkillDocument]:
        documents = []
        for record in await self._store.search(AgentFilter()):
            try:
                document = decode_skill_document(record.skill)
            except DeserializationError as e:
                logger.error("Failed to parse skills for agent %s: %s", record.name, e.message)
                continue
            document.agent_name = record.name
            document.url = record.url
            documents.append(document)
        return documents
