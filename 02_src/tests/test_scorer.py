"""Tests for the skill scorer."""

import pytest

from receptionist.matching.scorer import (
    fallback_text_similarity,
    keyword_match_score,
    score_skill,
    semantic_match_score,
    tag_match_score,
)
from receptionist.models import SkillMeta, SkillQuery


def skill(skill_id="s", name="", description="", tags=()):
    return SkillMeta(id=skill_id, name=name, description=description, tags=tuple(tags))


class TestExactId:
    """Tests for the exact id stage."""

    def test_exact_id_is_perfect_match(self):
        """Test that an exact id match short-circuits with 1.0."""
        result = score_skill(skill("echo", name="Echo"), SkillQuery(skill_id="echo"), "agent")
        assert result.confidence == 1.0
        assert result.reasons == ("exact-id-match",)
        assert result.agent_name == "agent"

    def test_exact_id_ignores_surrounding_whitespace(self):
        """Test that a padded id still scores as an exact match."""
        result = score_skill(skill("echo"), SkillQuery(skill_id=" echo "), "agent")
        assert result.confidence == 1.0
        assert result.reasons == ("exact-id-match",)

    def test_exact_id_ignores_case(self):
        """Test that id comparison is case-insensitive."""
        result = score_skill(skill("Echo"), SkillQuery(skill_id="ECHO"), "agent")
        assert result.confidence == 1.0


class TestTagMatch:
    """Tests for the tag stage."""

    def test_and_all_tags_present(self):
        """Test AND mode with every required tag present scores 0.9."""
        query = SkillQuery(required_tags=("nlp", "ocr", "pdf"), match_all_tags=True)
        result = score_skill(skill(tags=("nlp", "ocr", "pdf")), query, "a")
        assert result.confidence == pytest.approx(0.9)
        assert "tag-match-0.90" in result.reasons

    def test_and_partial_coverage(self):
        """Test AND mode with k of N tags scores k/N * 0.7."""
        query = SkillQuery(required_tags=("nlp", "ocr", "pdf", "csv"), match_all_tags=True)
        result = score_skill(skill(tags=("nlp", "pdf")), query, "a")
        assert result.confidence == pytest.approx(2 / 4 * 0.7)

    def test_or_direct_match(self):
        """Test OR mode scores the covered ratio."""
        query = SkillQuery(required_tags=("nlp", "xyz"))
        result = score_skill(skill(tags=("nlp", "ocr")), query, "a")
        assert result.confidence == pytest.approx(0.5)

    def test_or_capped_at_point_eight(self):
        """Test OR mode never exceeds 0.8."""
        assert tag_match_score({"nlp"}, ("nlp",), False) == pytest.approx(0.8)

    def test_or_semantic_only_penalized(self):
        """Test that semantic-only tag matches are scaled by 0.8."""
        assert tag_match_score({"audit"}, ("review",), False) == pytest.approx(0.8 * 0.8)

    def test_skill_without_tags(self):
        """Test that a skill with no tags scores zero on tags."""
        assert tag_match_score(set(), ("nlp",), False) == 0.0

    def test_tags_compared_lowercase(self):
        """Test that tag comparison ignores case."""
        query = SkillQuery(required_tags=("NLP",))
        result = score_skill(skill(tags=("Nlp",)), query, "a")
        assert result.confidence == pytest.approx(0.8)


class TestKeywordMatch:
    """Tests for the keyword stage."""

    def test_exact_keywords(self):
        """Test that literal keyword hits score 0.8 per keyword ratio."""
        assert keyword_match_score(skill(name="Echo", tags=("text",)), ("echo", "text")) == pytest.approx(0.8)

    def test_mixed_exact_and_semantic(self):
        """Test that exact and semantic hits are weighted 0.8 and 0.6."""
        score = keyword_match_score(skill(name="Echo", tags=("review",)), ("echo", "audit"))
        assert score == pytest.approx(0.5 * 0.8 + 0.5 * 0.6)

    def test_synonym_keyword_matches_tag(self):
        """Test that 'audit' matches a skill tagged 'review' through the synonym table."""
        review = skill(name="Quarterly Report", description="Checks numbers", tags=("review",))
        result = score_skill(review, SkillQuery(keywords=("audit",)), "a")

        assert "keyword-match-0.60" in result.reasons
        assert result.confidence > 0

    def test_blank_keyword_matches_nothing(self):
        """Test that a blank keyword is ignored instead of matching every skill."""
        unrelated = skill("x", name="Totally Unrelated", description="nothing")
        result = score_skill(unrelated, SkillQuery(keywords=("",)), "a")

        assert result.confidence == 0.0
        assert result.reasons == ()

    def test_blank_keywords_not_counted(self):
        """Test that blank keywords do not dilute the keyword ratio."""
        assert keyword_match_score(skill(name="Echo"), ("echo", "  ")) == pytest.approx(0.8)

    def test_no_keyword_hits(self):
        """Test that unrelated keywords score zero."""
        assert keyword_match_score(skill(name="Echo"), ("weather",)) == 0.0


class TestSemanticMatch:
    """Tests for the semantic description stage."""

    def test_ratio_above_threshold(self):
        """Test that a ratio above 0.3 becomes the score."""
        query = SkillQuery(keywords=("banking", "aaaa"))
        assert semantic_match_score(skill(name="finance"), query) == pytest.approx(0.5)

    def test_ratio_below_threshold(self):
        """Test that a ratio of 0.3 or less scores zero."""
        query = SkillQuery(keywords=("banking", "aaaa", "bbbb", "cccc"))
        assert semantic_match_score(skill(name="finance"), query) == 0.0

    def test_capped_at_point_seven_five(self):
        """Test that a full semantic match is capped at 0.75."""
        query = SkillQuery(keywords=("finance",))
        assert semantic_match_score(skill(name="banking"), query) == pytest.approx(0.75)


class TestFallback:
    """Tests for the Jaccard fallback stage."""

    def test_fallback_used_when_nothing_else_matches(self):
        """Test that word overlap rescues a near-miss id."""
        text_skill = skill("text-tools", name="text", description="text helper")
        result = score_skill(text_skill, SkillQuery(skill_id="text"), "a")

        assert result.confidence == pytest.approx(0.6)
        assert result.reasons == ("text-similarity-0.60",)

    def test_fallback_below_threshold_ignored(self):
        """Test that weak overlap leaves confidence at zero."""
        result = score_skill(skill("alpha", name="alpha"), SkillQuery(skill_id="zzz"), "a")
        assert result.confidence == 0.0
        assert result.reasons == ()

    def test_partial_bonus_capped(self):
        """Test that the partial-match bonus adds at most 0.3."""
        wide = skill(name="ab abc abcd abcde abcdef")
        score = fallback_text_similarity(wide, SkillQuery(skill_id="a"))
        assert score == pytest.approx(0.3)

    def test_empty_query(self):
        """Test that a query without criteria scores zero."""
        assert score_skill(skill(name="anything"), SkillQuery(), "a").confidence == 0.0


class TestConfidenceRange:
    """Tests for overall confidence bounds."""

    @pytest.mark.parametrize(
        "query",
        [
            SkillQuery(skill_id="echo"),
            SkillQuery(keywords=("echo", "text", "audit", "review")),
            SkillQuery(required_tags=("text", "review"), match_all_tags=True),
            SkillQuery(required_tags=("text",), keywords=("repeat",)),
        ],
    )
    def test_confidence_within_bounds(self, query):
        """Test that every stage combination stays in [0, 1]."""
        target = skill("echo", name="Echo", description="Repeats text", tags=("text", "review"))
        result = score_skill(target, query, "a")
        assert 0.0 <= result.confidence <= 1.0
