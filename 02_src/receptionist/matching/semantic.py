"""Semantic helpers: synonym groups, word similarity and searchable text."""

from types import MappingProxyType
from typing import Mapping

from ..models import SkillMeta, SkillQuery

# Process-wide synonym table, keyed by a representative word
SEMANTIC_GROUPS: Mapping[str, frozenset[str]] = MappingProxyType(
    {
        "review": frozenset(
            {"review", "assessment", "evaluation", "analysis", "audit", "examination", "inspection"}
        ),
        "executive": frozenset(
            {"executive", "leadership", "management", "strategic", "senior", "c-level", "director"}
        ),
        "banking": frozenset(
            {"banking", "financial", "finance", "fintech", "monetary", "credit", "lending"}
        ),
        "ai": frozenset(
            {"ai", "artificial-intelligence", "machine-learning", "ml", "intelligent", "smart", "automated"}
        ),
        "product": frozenset(
            {"product", "service", "offering", "solution", "platform", "system"}
        ),
        "digital": frozenset(
            {"digital", "online", "electronic", "cyber", "virtual", "tech", "technology"}
        ),
    }
)

_PREFIX_LENGTH = 4


def are_semantically_similar(word1: str, word2: str) -> bool:
    """Equal, same synonym group, or sharing a 4-char stem (both longer than 4)."""
    word1 = word1.lower().strip()
    word2 = word2.lower().strip()

    if word1 == word2:
        return True

    for group in SEMANTIC_GROUPS.values():
        if word1 in group and word2 in group:
            return True

    # Crude stemming: "analyze" ~ "analysis"
    if len(word1) > _PREFIX_LENGTH and len(word2) > _PREFIX_LENGTH:
        return word1.startswith(word2[:_PREFIX_LENGTH]) or word2.startswith(
            word1[:_PREFIX_LENGTH]
        )
    return False


def contains_semantic_match(text: str, term: str) -> bool:
    """True if term occurs in text or any word of text is similar to it."""
    lower_text = text.lower()
    lower_term = term.lower()

    if lower_term in lower_text:
        return True
    return any(are_semantically_similar(word, lower_term) for word in lower_text.split())


def searchable_text(skill: SkillMeta) -> str:
    """Skill name, description and tags joined by spaces."""
    parts = [skill.name or "", skill.description or "", *skill.tags]
    return " ".join(part for part in parts if part).strip()


def query_terms(query: SkillQuery) -> list[str]:
    """Non-empty, trimmed skill id, keywords and tags of a query."""
    terms: list[str] = []
    if query.skill_id is not None:
        terms.append(query.skill_id)
    terms.extend(query.keywords)
    terms.extend(query.required_tags)
    return [term.strip() for term in terms if term is not None and term.strip()]


def has_descriptive_text(query: SkillQuery) -> bool:
    """Any keyword or tag longer than 3 characters."""
    return any(len(k) > 3 for k in query.keywords) or any(
        len(t) > 3 for t in query.required_tags
    )


def has_any_text_criteria(query: SkillQuery) -> bool:
    return bool(query.keywords or query.required_tags or query.has_exact_criteria)
