"""Capability query and match result models."""

from dataclasses import dataclass

from ..config import DEFAULT_MAX_RESULTS
from .agents import SkillMeta


@dataclass(frozen=True)
class SkillQuery:
    """Partially described wanted capability."""

    skill_id: str | None = None
    required_tags: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    match_all_tags: bool = False
    max_results: int | None = DEFAULT_MAX_RESULTS

    def __post_init__(self) -> None:
        # Trimmed id, None when blank; the store filter trims the same way
        skill_id = self.skill_id.strip() if self.skill_id else None
        object.__setattr__(self, "skill_id", skill_id or None)
        # Accept any iterable from callers, store tuples
        object.__setattr__(self, "required_tags", tuple(self.required_tags or ()))
        object.__setattr__(self, "keywords", tuple(self.keywords or ()))
        if self.max_results is None:
            object.__setattr__(self, "max_results", DEFAULT_MAX_RESULTS)

    @property
    def has_exact_criteria(self) -> bool:
        return bool(self.skill_id and self.skill_id.strip())


@dataclass(frozen=True)
class MatchResult:
    """One skill scored against one query."""

    skill: SkillMeta
    agent_name: str
    confidence: float
    reasons: tuple[str, ...] = ()
