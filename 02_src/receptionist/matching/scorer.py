"""Skill scorer: rates one skill against one capability query.

Stages run in order and keep a running maximum:

1. exact id (short-circuits with 1.0)
2. tag match, AND/OR semantics with synonym expansion
3. keyword match against the searchable text
4. semantic match of all query terms
5. Jaccard fallback, only while the confidence is still zero
"""

from ..config import FALLBACK_MIN_SCORE
from ..models import MatchResult, SkillMeta, SkillQuery
from .semantic import (
    are_semantically_similar,
    contains_semantic_match,
    has_any_text_criteria,
    has_descriptive_text,
    query_terms,
    searchable_text,
)


def score_skill(skill: SkillMeta, query: SkillQuery, agent_name: str) -> MatchResult:
    """Score one skill. Confidence is in [0, 1]."""
    confidence = 0.0
    reasons: list[str] = []

    if query.skill_id is not None and skill.id.lower() == query.skill_id.lower():
        return MatchResult(skill, agent_name, 1.0, ("exact-id-match",))

    if query.required_tags:
        skill_tags = {tag.lower() for tag in skill.tags}
        tag_score = tag_match_score(skill_tags, query.required_tags, query.match_all_tags)
        if tag_score > 0:
            confidence = max(confidence, tag_score)
            reasons.append(f"tag-match-{tag_score:.2f}")

    if query.keywords:
        keyword_score = keyword_match_score(skill, query.keywords)
        if keyword_score > 0:
            confidence = max(confidence, keyword_score)
            reasons.append(f"keyword-match-{keyword_score:.2f}")

    if has_descriptive_text(query):
        semantic_score = semantic_match_score(skill, query)
        if semantic_score > 0:
            confidence = max(confidence, semantic_score)
            reasons.append(f"semantic-match-{semantic_score:.2f}")

    if confidence == 0.0 and has_any_text_criteria(query):
        fallback_score = fallback_text_similarity(skill, query)
        if fallback_score > FALLBACK_MIN_SCORE:
            confidence = fallback_score
            reasons.append(f"text-similarity-{fallback_score:.2f}")

    return MatchResult(skill, agent_name, confidence, tuple(reasons))


def tag_match_score(
    skill_tags: set[str], required_tags: tuple[str, ...], match_all: bool
) -> float:
    """Score lower-cased skill tags against the required tags.

    A required tag is covered when some skill tag equals it or is
    semantically similar to it.
    """
    if not skill_tags:
        return 0.0

    wanted = {tag.lower() for tag in required_tags}
    direct = skill_tags & wanted
    semantic = {
        query_tag
        for query_tag in wanted
        for skill_tag in skill_tags
        if are_semantically_similar(skill_tag, query_tag)
    }
    covered = len(direct | semantic)

    if match_all:
        if covered >= len(wanted):
            return 0.9
        return covered / len(wanted) * 0.7

    if covered == 0:
        return 0.0
    score = min(0.8, covered / len(wanted))
    # Semantic-only matches are penalized
    return score if direct else score * 0.8


def keyword_match_score(skill: SkillMeta, keywords: tuple[str, ...]) -> float:
    text = searchable_text(skill).lower()
    words = set(text.split())

    wanted = [keyword.strip().lower() for keyword in keywords if keyword and keyword.strip()]
    if not wanted:
        return 0.0

    exact_matches = 0
    semantic_matches = 0
    for lower_keyword in wanted:
        if lower_keyword in words or lower_keyword in text:
            exact_matches += 1
        elif any(are_semantically_similar(word, lower_keyword) for word in words):
            semantic_matches += 1

    if exact_matches + semantic_matches == 0:
        return 0.0

    total = len(wanted)
    return min(0.85, exact_matches / total * 0.8 + semantic_matches / total * 0.6)


def semantic_match_score(skill: SkillMeta, query: SkillQuery) -> float:
    terms = query_terms(query)
    if not terms:
        return 0.0

    text = searchable_text(skill)
    matches = sum(1 for term in terms if contains_semantic_match(text, term))
    ratio = matches / len(terms)
    return min(0.75, ratio) if ratio > 0.3 else 0.0


def fallback_text_similarity(skill: SkillMeta, query: SkillQuery) -> float:
    """Jaccard word overlap plus a capped bonus for partial word matches."""
    terms = query_terms(query)
    if not terms:
        return 0.0

    skill_words = set(searchable_text(skill).lower().split())
    query_words = {word for term in terms for word in term.lower().split()}

    union = skill_words | query_words
    jaccard = len(skill_words & query_words) / len(union) if union else 0.0

    partial = 0.0
    for query_word in query_words:
        for skill_word in skill_words:
            if skill_word in query_word or query_word in skill_word:
                partial += 0.1

    return min(0.6, jaccard + min(0.3, partial))
